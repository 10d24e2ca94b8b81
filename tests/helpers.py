"""
Test helpers for building rosters and catalogs.

Provides:
1. Character/faction builders with terse standing specs
2. A small custom catalog with generous caps for arithmetic tests
"""

from typing import Dict, List, Optional, Tuple

from campaign.stats.catalog import TAG_SCORE_BONUSES, Catalog, build_catalog
from campaign.stats.core import (
    Character,
    Cyberware,
    CyberwareModifiers,
    Distinction,
    Faction,
    FactionRelationship,
    FactionStanding,
    Perk,
    PerkTag,
    Relationship,
    SpeciesStats,
    Standing,
    StatModifiers,
)


# =============================================================================
# ENTITY BUILDERS
# =============================================================================

def make_character(
    name: str,
    species: str = "Human",
    perks: Optional[List[str]] = None,
    distinctions: Optional[List[str]] = None,
    factions: Optional[Dict[str, Standing]] = None,
    relationships: Optional[Dict[str, Standing]] = None,
    cyberware: Optional[List[Cyberware]] = None,
    present: bool = False,
    character_id: Optional[str] = None,
) -> Character:
    """
    Build a character.

    Args:
        name: Character name (also the id unless character_id is given)
        factions: faction name -> standing
        relationships: other character name -> standing
    """
    return Character(
        character_id=character_id or name.lower(),
        name=name,
        species=species,
        perk_ids=list(perks or []),
        distinction_ids=list(distinctions or []),
        factions=[FactionStanding(n, s) for n, s in (factions or {}).items()],
        relationships=[Relationship(n, s) for n, s in (relationships or {}).items()],
        cyberware=list(cyberware or []),
        present=present,
    )


def make_faction(name: str, standings: Optional[Dict[str, Standing]] = None) -> Faction:
    """Build a faction with declared standings toward other factions."""
    return Faction(
        name=name,
        relationships=[FactionRelationship(n, s) for n, s in (standings or {}).items()],
    )


def make_cyberware(name: str = "Implant", **modifiers) -> Cyberware:
    """Build a cyberware item; keyword args go to CyberwareModifiers."""
    return Cyberware(name=name, stat_modifiers=CyberwareModifiers(**modifiers))


def link(a: Character, b: Character, standing: Standing,
         reverse: Optional[Standing] = None) -> None:
    """Add a relationship a->b and its reciprocal, as the storage layer does."""
    a.relationships.append(Relationship(b.name, standing))
    b.relationships.append(Relationship(a.name, reverse or standing))


# =============================================================================
# TEST CATALOG
# =============================================================================

# Species with room to grow: caps well above anything the tests reach
TEST_SPECIES: Dict[str, SpeciesStats] = {
    "Human": SpeciesStats(base_health=10, base_limit=5, health_cap=100, limit_cap=100),
    "Mutant": SpeciesStats(base_health=2, base_limit=1, health_cap=5, limit_cap=5),
    "Perfect Mutant": SpeciesStats(base_health=2, base_limit=1, health_cap=5, limit_cap=5),
}

TEST_PERKS: List[Perk] = [
    Perk("str_1", "Heavy Lifter", "", PerkTag.STRENGTH, StatModifiers(health=1)),
    Perk("str_2", "Iron Grip", "", PerkTag.STRENGTH, StatModifiers(health=1)),
    Perk("str_3", "Bull Rush", "", PerkTag.STRENGTH, StatModifiers(health=1)),
    Perk("str_4", "Brawler", "", PerkTag.STRENGTH),
    Perk("str_5", "Crusher", "", PerkTag.STRENGTH),
    Perk("str_6", "Titan Grip", "", PerkTag.STRENGTH),
    Perk("str_7", "Wrecker", "", PerkTag.STRENGTH),
    Perk("str_8", "Breaker", "", PerkTag.STRENGTH),
    Perk("str_9", "Juggernaut", "", PerkTag.STRENGTH),
    Perk("str_10", "Colossus", "", PerkTag.STRENGTH),
    Perk("agi_1", "Sidestep", "", PerkTag.AGILITY),
    Perk("agi_2", "Tumble", "", PerkTag.AGILITY),
    Perk("smarts_1", "Big Brain", "", PerkTag.SMARTS,
         StatModifiers(health=-1, limit=1),
         frozenset({"Mutant", "Perfect Mutant", "Tech-Mutant"})),
    Perk("tech_1", "Tinkerer", "", PerkTag.TECHNICAL, StatModifiers(limit=1)),
]

TEST_DISTINCTIONS: List[Distinction] = [
    Distinction("d_a", "Paced", "", 150),
    Distinction("d_b", "Pacifist", "", 150),
    Distinction("d_c", "Brittle", "", 50, frozenset({"Mutant"})),
]


def make_test_catalog(
    species: Optional[Dict[str, SpeciesStats]] = None
) -> Catalog:
    """Custom catalog with TEST_SPECIES/TEST_PERKS and the real bonus ladder."""
    return build_catalog(
        species=species or TEST_SPECIES,
        perks=TEST_PERKS,
        distinctions=TEST_DISTINCTIONS,
        recipes=[],
        tag_bonuses=TAG_SCORE_BONUSES,
    )


def names(items) -> List[str]:
    """Names of CharacterInfluence / Character / PowerCenter items, in order."""
    return [getattr(item, "name") for item in items]


def pairs(mutual) -> List[Tuple[str, str]]:
    return [(m.first.name, m.second.name) for m in mutual]
