"""
Faction roll-ups: membership, standing distribution, perk/distinction
frequency, and combined strength with allied factions.

Membership is derived, never stored: a character belongs to a faction
only through an Ally or Friend entry for it. Neutral, Hostile and
Enemy entries show up in standing_counts but not in membership.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from campaign.stats.catalog import Catalog, get_catalog
from campaign.stats.config import get_config
from campaign.stats.core import Character, FactionRelationship, PerkTag, Standing
from campaign.stats.derived import compute_tag_scores
from campaign.stats.roster import (
    UNKNOWN_DISTINCTION,
    UNKNOWN_PERK,
    CountEntry,
    rank_frequencies,
)


@dataclass
class TagCount:
    tag: PerkTag
    count: int
    percentage: float = 0.0


@dataclass
class FactionStats:
    """Computed per faction-stats load."""
    faction_name: str
    total_members: int = 0
    present_members: int = 0
    member_names: List[str] = field(default_factory=list)
    standing_counts: Dict[Standing, int] = field(default_factory=dict)
    perk_tag_counts: Dict[PerkTag, int] = field(
        default_factory=lambda: {tag: 0 for tag in PerkTag}
    )
    top_perk_tags: List[TagCount] = field(default_factory=list)
    common_perks: List[CountEntry] = field(default_factory=list)
    common_distinctions: List[CountEntry] = field(default_factory=list)
    species_distribution: Dict[str, int] = field(default_factory=dict)
    relationships: List[FactionRelationship] = field(default_factory=list)
    allied_factions: List[str] = field(default_factory=list)
    enemy_factions: List[str] = field(default_factory=list)


@dataclass
class CombinedFactionAnalysis:
    """What a faction fields if its allies fight alongside it."""
    faction_name: str
    direct_members: int
    allied_factions: List[str]
    combined_members: int
    combined_perk_tags: Dict[PerkTag, int]
    strength_multiplier: float
    top_combined_perk_tags: List[TagCount] = field(default_factory=list)


# =============================================================================
# HELPERS
# =============================================================================

def faction_members(faction_name: str, characters: List[Character]) -> List[Character]:
    """Characters with a positive standing entry for the faction, in roster order."""
    return [c for c in characters if c.is_member_of(faction_name)]


def _unique(names: List[str]) -> List[str]:
    seen = set()
    result = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


def allied_faction_names(
    faction_name: str,
    relationships: List[FactionRelationship]
) -> List[str]:
    return _unique([
        rel.faction_name for rel in relationships
        if rel.standing.is_positive and rel.faction_name != faction_name
    ])


def enemy_faction_names(
    faction_name: str,
    relationships: List[FactionRelationship]
) -> List[str]:
    return _unique([
        rel.faction_name for rel in relationships
        if rel.standing.is_negative and rel.faction_name != faction_name
    ])


def sum_tag_scores(
    characters: List[Character],
    catalog: Catalog
) -> Dict[PerkTag, int]:
    """Per-tag sum of effective tag scores across characters."""
    totals = {tag: 0 for tag in PerkTag}
    for character in characters:
        for tag, score in compute_tag_scores(character, catalog).items():
            totals[tag] += score
    return totals


def rank_tags(
    tag_counts: Dict[PerkTag, int],
    total: int,
    limit: Optional[int] = None
) -> List[TagCount]:
    """
    Non-zero tags sorted by count, descending.

    Ties keep PerkTag declaration order. percentage is relative
    to total, or 0.0 when total is 0.
    """
    ranked = [
        TagCount(
            tag=tag,
            count=tag_counts.get(tag, 0),
            percentage=(tag_counts.get(tag, 0) / total * 100) if total > 0 else 0.0,
        )
        for tag in PerkTag
        if tag_counts.get(tag, 0) > 0
    ]
    ranked = sorted(ranked, key=lambda t: -t.count)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


def bar_width_percentage(
    count: int,
    max_count: int,
    floor: Optional[float] = None
) -> float:
    """
    Width of a perk-tag chart bar as a percentage of the widest bar.

    Non-zero bars never drop below the configured floor; zero bars are 0.
    """
    if floor is None:
        floor = get_config().faction_report.bar_floor_percent
    if count <= 0 or max_count <= 0:
        return 0.0
    return max(count / max_count * 100, floor)


# =============================================================================
# FACTION STATS
# =============================================================================

def calculate_faction_stats(
    faction_name: str,
    all_characters: List[Character],
    faction_relationships: Optional[List[FactionRelationship]] = None,
    catalog: Optional[Catalog] = None
) -> FactionStats:
    """
    Compute roll-up statistics for one faction.

    A faction with no members returns zero counts and empty
    listings; no percentage divides by zero.

    Args:
        faction_name: Faction to analyse (case-sensitive)
        all_characters: Full roster snapshot
        faction_relationships: The faction's declared standings toward other factions
        catalog: Reference tables (default: active catalog)

    Returns:
        FactionStats for the faction
    """
    if catalog is None:
        catalog = get_catalog()
    if faction_relationships is None:
        faction_relationships = []
    limit = get_config().faction_report.common_limit

    members = faction_members(faction_name, all_characters)
    total = len(members)

    standing_counts: Dict[Standing, int] = {}
    for character in all_characters:
        standing = character.standing_for(faction_name)
        if standing is not None:
            standing_counts[standing] = standing_counts.get(standing, 0) + 1

    species_distribution: Dict[str, int] = {}
    for member in members:
        species_distribution[member.species] = species_distribution.get(member.species, 0) + 1

    perk_tag_counts = sum_tag_scores(members, catalog)

    return FactionStats(
        faction_name=faction_name,
        total_members=total,
        present_members=sum(1 for m in members if m.present),
        member_names=[m.name for m in members],
        standing_counts=standing_counts,
        perk_tag_counts=perk_tag_counts,
        top_perk_tags=rank_tags(perk_tag_counts, total, limit),
        common_perks=rank_frequencies(
            (m.perk_ids for m in members), catalog.perks, UNKNOWN_PERK, total, limit
        ),
        common_distinctions=rank_frequencies(
            (m.distinction_ids for m in members),
            catalog.distinctions,
            UNKNOWN_DISTINCTION,
            total,
            limit,
        ),
        species_distribution=species_distribution,
        relationships=list(faction_relationships),
        allied_factions=allied_faction_names(faction_name, faction_relationships),
        enemy_factions=enemy_faction_names(faction_name, faction_relationships),
    )


def get_all_faction_stats(
    all_characters: List[Character],
    relationships_map: Dict[str, List[FactionRelationship]],
    catalog: Optional[Catalog] = None
) -> List[FactionStats]:
    """FactionStats for every faction in the map, in map order."""
    return [
        calculate_faction_stats(name, all_characters, relationships, catalog)
        for name, relationships in relationships_map.items()
    ]


# =============================================================================
# COMBINED FORCE
# =============================================================================

def calculate_combined_faction_stats(
    faction_name: str,
    all_characters: List[Character],
    relationships_map: Dict[str, List[FactionRelationship]],
    catalog: Optional[Catalog] = None
) -> CombinedFactionAnalysis:
    """
    Project a faction's strength with all of its allies.

    Members are unioned by character id, so a character in
    several of the allied factions is counted once.
    strength_multiplier is combined / direct, or 0.0 for a
    faction with no direct members.

    Args:
        faction_name: Faction to analyse
        all_characters: Full roster snapshot
        relationships_map: Faction name -> declared faction standings
        catalog: Reference tables (default: active catalog)

    Returns:
        CombinedFactionAnalysis for the faction
    """
    if catalog is None:
        catalog = get_catalog()

    allies = allied_faction_names(faction_name, relationships_map.get(faction_name, []))
    direct = faction_members(faction_name, all_characters)

    combined: Dict[str, Character] = {c.character_id: c for c in direct}
    for ally in allies:
        for member in faction_members(ally, all_characters):
            combined.setdefault(member.character_id, member)

    combined_members = len(combined)
    combined_tags = sum_tag_scores(list(combined.values()), catalog)

    if direct:
        strength_multiplier = combined_members / len(direct)
    else:
        strength_multiplier = 0.0

    return CombinedFactionAnalysis(
        faction_name=faction_name,
        direct_members=len(direct),
        allied_factions=allies,
        combined_members=combined_members,
        combined_perk_tags=combined_tags,
        strength_multiplier=strength_multiplier,
        top_combined_perk_tags=rank_tags(
            combined_tags,
            combined_members,
            get_config().faction_report.combined_tag_limit,
        ),
    )
