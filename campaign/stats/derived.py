"""
Derived stat computation for a single character.

    max_health = min(base + perk mods + tag bonuses + cyberware,
                     species cap + cyberware cap adjustments)

Same for max_limit. Tag bonus thresholds are cumulative: every
threshold met on a tag's ladder pays out, not only the highest.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from campaign.stats.catalog import (
    MUTANT_SPECIES,
    PERFECT_MUTANT,
    Catalog,
    get_catalog,
)
from campaign.stats.core import Character, Perk, PerkTag, SpeciesStats

logger = logging.getLogger(__name__)

# Fallback for species missing from the table
_ZERO_SPECIES = SpeciesStats(base_health=0, base_limit=0, health_cap=0, limit_cap=0)


@dataclass
class DerivedStats:
    """Computed on every read, never cached or persisted."""
    max_health: int = 0
    max_limit: int = 0
    tag_scores: Dict[PerkTag, int] = field(
        default_factory=lambda: {tag: 0 for tag in PerkTag}
    )


def _resolve_species(species: str, catalog: Catalog) -> SpeciesStats:
    stats = catalog.species.get(species)
    if stats is None:
        logger.warning("Unknown species %r, using zero base stats", species)
        return _ZERO_SPECIES
    return stats


def resolve_perks(character: Character, catalog: Catalog) -> List[Perk]:
    """
    Look up the character's perks, skipping dangling ids.

    Duplicate ids count once per occurrence.
    """
    perks = []
    for perk_id in character.perk_ids:
        perk = catalog.perks.get(perk_id)
        if perk is None:
            logger.warning(
                "Character %r references unknown perk %r", character.name, perk_id
            )
            continue
        perks.append(perk)
    return perks


def _counts_toward_tag_score(perk: Perk, species: str) -> bool:
    # Perfect Mutants keep the stat modifiers of mutant-gated perks
    # but earn no tag score from them.
    if species == PERFECT_MUTANT and perk.allowed_species == MUTANT_SPECIES:
        return False
    return True


def compute_tag_scores(
    character: Character,
    catalog: Optional[Catalog] = None
) -> Dict[PerkTag, int]:
    """
    Effective tag scores for a character.

    Score = number of the character's perks carrying the tag,
    shifted by cyberware tag modifiers, floored at zero.

    Returns:
        Dict with an entry for all twelve tags
    """
    if catalog is None:
        catalog = get_catalog()
    return _tag_scores(character, resolve_perks(character, catalog))


def _tag_scores(character: Character, perks: List[Perk]) -> Dict[PerkTag, int]:
    scores = {tag: 0 for tag in PerkTag}
    for perk in perks:
        if _counts_toward_tag_score(perk, character.species):
            scores[perk.tag] += 1

    for item in character.cyberware:
        for tag, amount in item.stat_modifiers.tag_modifiers.items():
            if tag in scores:
                scores[tag] += amount

    return {tag: max(score, 0) for tag, score in scores.items()}


def tag_bonus_totals(
    tag_scores: Dict[PerkTag, int],
    catalog: Catalog
) -> Dict[str, int]:
    """
    Sum health/limit from every bonus threshold met.

    Returns:
        {"health": int, "limit": int}
    """
    health = 0
    limit = 0
    for tag, score in tag_scores.items():
        ladder = sorted(catalog.tag_bonuses.get(tag, []), key=lambda b: b.required_score)
        for bonus in ladder:
            if score < bonus.required_score:
                break
            health += bonus.health
            limit += bonus.limit
    return {"health": health, "limit": limit}


def calculate_derived_stats(
    character: Character,
    catalog: Optional[Catalog] = None
) -> DerivedStats:
    """
    Compute max health, max limit and tag scores for a character.

    Unknown species fall back to zero base stats; unknown perk ids
    are skipped. Both are logged, neither raises.

    Args:
        character: The character to evaluate
        catalog: Reference tables (default: active catalog)

    Returns:
        DerivedStats for the character
    """
    if catalog is None:
        catalog = get_catalog()

    species = _resolve_species(character.species, catalog)
    max_health = species.base_health
    max_limit = species.base_limit
    health_cap = species.health_cap
    limit_cap = species.limit_cap

    perks = resolve_perks(character, catalog)
    tag_scores = _tag_scores(character, perks)
    bonuses = tag_bonus_totals(tag_scores, catalog)
    max_health += bonuses["health"]
    max_limit += bonuses["limit"]

    for perk in perks:
        if perk.stat_modifiers is not None:
            max_health += perk.stat_modifiers.health
            max_limit += perk.stat_modifiers.limit

    for item in character.cyberware:
        mods = item.stat_modifiers
        max_health += mods.health
        max_limit += mods.limit
        health_cap += mods.health_cap
        limit_cap += mods.limit_cap

    return DerivedStats(
        max_health=min(max_health, health_cap),
        max_limit=min(max_limit, limit_cap),
        tag_scores=tag_scores,
    )


def safe_derived_stats(
    character: Character,
    catalog: Optional[Catalog] = None
) -> DerivedStats:
    """
    calculate_derived_stats for rendering paths.

    Any failure is logged and replaced by a zero-valued DerivedStats,
    so a corrupted record never takes down the detail view.
    """
    try:
        return calculate_derived_stats(character, catalog)
    except Exception:
        logger.exception("Derived stats failed for character %r", getattr(character, "name", None))
        return DerivedStats()
