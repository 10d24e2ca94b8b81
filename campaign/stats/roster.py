"""
Roster-wide character statistics.

Distributions over the whole roster: species, faction entries,
standings per faction, and the most common perks/distinctions.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from campaign.stats.catalog import Catalog, get_catalog
from campaign.stats.config import get_config
from campaign.stats.core import Character, Standing

UNKNOWN_PERK = "Unknown Perk"
UNKNOWN_DISTINCTION = "Unknown Distinction"


@dataclass
class CountEntry:
    """One row of a frequency listing."""
    entry_id: str
    name: str
    count: int
    percentage: float = 0.0


@dataclass
class CharacterStats:
    total_characters: int = 0
    species_distribution: Dict[str, int] = field(default_factory=dict)
    faction_distribution: Dict[str, int] = field(default_factory=dict)
    faction_standings: Dict[str, Dict[Standing, int]] = field(default_factory=dict)
    common_perks: List[CountEntry] = field(default_factory=list)
    common_distinctions: List[CountEntry] = field(default_factory=list)


def rank_frequencies(
    id_lists: Iterable[Iterable[str]],
    catalog_entries: Mapping,
    unknown_label: str,
    total: int = 0,
    limit: Optional[int] = None
) -> List[CountEntry]:
    """
    Count id occurrences and rank them by count, descending.

    Ties keep catalog declaration order; ids missing from the
    catalog follow in first-seen order under unknown_label.
    percentage is count / total * 100, or 0.0 when total is 0.

    Args:
        id_lists: One iterable of ids per character
        catalog_entries: Ordered id -> entry mapping (entries have .name)
        unknown_label: Name used for ids not in the catalog
        total: Denominator for percentage
        limit: Keep at most this many entries

    Returns:
        Ranked CountEntry list
    """
    counts: Dict[str, int] = {}
    for ids in id_lists:
        for entry_id in ids:
            counts[entry_id] = counts.get(entry_id, 0) + 1

    known = [entry_id for entry_id in catalog_entries if entry_id in counts]
    unknown = [entry_id for entry_id in counts if entry_id not in catalog_entries]

    entries = []
    for entry_id in known + unknown:
        entry = catalog_entries.get(entry_id)
        count = counts[entry_id]
        entries.append(CountEntry(
            entry_id=entry_id,
            name=entry.name if entry is not None else unknown_label,
            count=count,
            percentage=(count / total * 100) if total > 0 else 0.0,
        ))

    # sorted() is stable, so catalog order breaks ties
    entries = sorted(entries, key=lambda e: -e.count)
    if limit is not None:
        entries = entries[:limit]
    return entries


def calculate_character_stats(
    characters: List[Character],
    catalog: Optional[Catalog] = None
) -> CharacterStats:
    """
    Compute distributions over the whole roster.

    An empty roster yields a zero-valued CharacterStats.
    """
    if catalog is None:
        catalog = get_catalog()
    limit = get_config().roster_report.common_limit

    stats = CharacterStats(total_characters=len(characters))

    for character in characters:
        stats.species_distribution[character.species] = (
            stats.species_distribution.get(character.species, 0) + 1
        )
        for entry in character.factions:
            stats.faction_distribution[entry.name] = (
                stats.faction_distribution.get(entry.name, 0) + 1
            )
            standings = stats.faction_standings.setdefault(entry.name, {})
            standings[entry.standing] = standings.get(entry.standing, 0) + 1

    stats.common_perks = rank_frequencies(
        (c.perk_ids for c in characters),
        catalog.perks,
        UNKNOWN_PERK,
        total=len(characters),
        limit=limit,
    )
    stats.common_distinctions = rank_frequencies(
        (c.distinction_ids for c in characters),
        catalog.distinctions,
        UNKNOWN_DISTINCTION,
        total=len(characters),
        limit=limit,
    )
    return stats
