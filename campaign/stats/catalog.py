"""
Static game catalogs: species table, perks, distinctions, recipes
and the tag score bonus ladder.

Reference data only. Loaded once, never mutated at runtime.
Tests and alternate rulesets swap the whole catalog with set_catalog().
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

from campaign.stats.core import (
    Distinction,
    Perk,
    PerkTag,
    Recipe,
    SpeciesStats,
    StatModifiers,
    TagScoreBonus,
)


# =============================================================================
# SPECIES
# =============================================================================

ORGANIC_SPECIES: FrozenSet[str] = frozenset({
    "Human", "Mutant", "Nomad", "Stray", "Unturned",
    "Cyborg", "Mook", "Mutoid", "Perfect Mutant", "Rad-Titan",
    "Roadkill", "Tech-Mutant",
})

ROBOTIC_SPECIES: FrozenSet[str] = frozenset({"Android", "Drone"})

MUTANT_SPECIES: FrozenSet[str] = frozenset({"Mutant", "Perfect Mutant", "Tech-Mutant"})

ANDROID_SPECIES: FrozenSet[str] = frozenset({"Android", "Tech-Mutant"})

_ORGANIC = SpeciesStats(
    base_health=2,
    base_limit=1,
    health_cap=5,
    limit_cap=5,
    can_use_cyberware=True,
    can_use_chems=True,
    can_take_injuries=True,
    can_take_malfunctions=False,
)

_ROBOTIC = SpeciesStats(
    base_health=2,
    base_limit=1,
    health_cap=5,
    limit_cap=5,
    can_use_cyberware=False,
    can_use_chems=False,
    can_take_injuries=False,
    can_take_malfunctions=True,
)

SPECIES_BASE_STATS: Dict[str, SpeciesStats] = {
    # Base species
    "Android": _ROBOTIC,
    "Drone": _ROBOTIC,
    "Human": SpeciesStats(base_health=2, base_limit=2, health_cap=5, limit_cap=5),
    "Mutant": _ORGANIC,
    "Nomad": _ORGANIC,
    "Stray": _ORGANIC,
    "Unturned": SpeciesStats(base_health=0, base_limit=3, health_cap=0, limit_cap=10),
    "Unknown": _ORGANIC,
    # Prestige species
    "Cyborg": _ORGANIC,
    "Mook": _ORGANIC,
    "Mutoid": _ORGANIC,
    "Perfect Mutant": _ORGANIC,
    "Rad-Titan": SpeciesStats(base_health=3, base_limit=0, health_cap=10, limit_cap=0),
    "Roadkill": _ORGANIC,
    "Tech-Mutant": _ORGANIC,
}

# Perfect Mutants gain no tag score from perks gated to exactly this set.
PERFECT_MUTANT = "Perfect Mutant"


# =============================================================================
# TAG SCORE BONUSES
# =============================================================================

TAG_SCORE_BONUSES: Dict[PerkTag, List[TagScoreBonus]] = {
    PerkTag.AGILITY: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, limit=1),
        TagScoreBonus(10, limit=1),
    ],
    PerkTag.CHARISMA: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, limit=1),
        TagScoreBonus(10, limit=1),
    ],
    PerkTag.CRAFTING: [
        TagScoreBonus(3, health=1),
        TagScoreBonus(6, limit=1),
        TagScoreBonus(10, health=1),
    ],
    PerkTag.DEFENSE: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, health=1, limit=1),
        TagScoreBonus(10, health=1, limit=1),
    ],
    PerkTag.ENDURANCE: [
        TagScoreBonus(3, health=1),
        TagScoreBonus(6, health=1),
        TagScoreBonus(10, health=2),
    ],
    PerkTag.FINESSE: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, limit=1),
        TagScoreBonus(10, limit=1),
    ],
    PerkTag.GRIT: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, health=1),
        TagScoreBonus(10, limit=1),
    ],
    PerkTag.MEDICAL: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, health=1),
        TagScoreBonus(10, limit=1),
    ],
    PerkTag.SMARTS: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, limit=1),
        TagScoreBonus(10, limit=1),
    ],
    PerkTag.STRENGTH: [
        TagScoreBonus(3, health=1),
        TagScoreBonus(6, health=1),
        TagScoreBonus(10, health=1),
    ],
    PerkTag.TEAMWORK: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, limit=1),
        TagScoreBonus(10, health=1, limit=1),
    ],
    PerkTag.TECHNICAL: [
        TagScoreBonus(3, limit=1),
        TagScoreBonus(6, health=1),
        TagScoreBonus(10, limit=1),
    ],
}


# =============================================================================
# RECIPES, PERKS, DISTINCTIONS
# =============================================================================

AVAILABLE_RECIPES: List[Recipe] = [
    Recipe("r1", "Makeshift Battery",
           "A jury-rigged power cell that can power small devices",
           ("Scrap Electronics", "Copper Wire", "Chemical Solution")),
    Recipe("r2", "Scrap Armor",
           "Basic protection crafted from salvaged materials",
           ("Metal Scraps", "Leather", "Fasteners")),
    Recipe("r3", "Advanced Power Armor",
           "High-tech protective suit with power assistance",
           ("Rare Alloy", "Power Core", "Hydraulic Systems", "Control Circuit")),
    Recipe("r4", "Energy Shield Generator",
           "Personal defense system that projects an energy barrier",
           ("Crystal Matrix", "Power Core", "Shield Emitter", "Control Circuit")),
]

AVAILABLE_PERKS: List[Perk] = [
    Perk("p1", "Quick Reflexes", "Enhanced reaction time in combat situations",
         PerkTag.AGILITY, StatModifiers(limit=1), ORGANIC_SPECIES),
    Perk("p2", "Natural Leader", "Inspires confidence in allies and followers",
         PerkTag.TEAMWORK, StatModifiers(limit=2), frozenset({"Unturned"})),
    Perk("p3", "Tech Savvy", "Proficient with all forms of technology",
         PerkTag.TECHNICAL, StatModifiers(limit=1),
         frozenset({"Android", "Cyborg", "Drone", "Mook"})),
    Perk("p4", "Survivalist", "Expert at surviving in harsh environments",
         PerkTag.GRIT, StatModifiers(health=2),
         frozenset({"Nomad", "Stray", "Roadkill"})),
    Perk("p5", "Silver Tongue", "Skilled at persuasion and negotiation",
         PerkTag.CHARISMA),
    Perk("p6", "Combat Medic", "Can provide medical aid even in dangerous situations",
         PerkTag.MEDICAL, StatModifiers(health=1),
         frozenset({"Human", "Mutant", "Unturned"})),
    Perk("p7", "Master Tactician", "Excels at planning and strategic thinking",
         PerkTag.SMARTS),
    Perk("p8", "Resourceful", "Makes the most of available resources",
         PerkTag.CRAFTING, recipe_ids=("r1", "r2")),
    Perk("p9", "Master Craftsman", "Expert at creating complex items and machinery",
         PerkTag.CRAFTING, recipe_ids=("r3", "r4")),
]

AVAILABLE_DISTINCTIONS: List[Distinction] = [
    Distinction("d1", "Apathetic",
                "Resting takes triple the time to recover limit flags.", 50),
    Distinction("d2", "Bad with Pets",
                "Near wild faction members, you cannot use limit flags or count as fresh/spent.", 50),
    Distinction("d3", "Bite Vulnerability",
                "The number of bite cards required for you to turn is always 3.", 100,
                ORGANIC_SPECIES),
    Distinction("d4", "Brittle",
                "The duration of all injuries or malfunctions you possess are doubled.", 50),
    Distinction("d5", "Burnout",
                "Your maximum XP cap is reduced by 250.", 100),
    Distinction("d6", "Chem Resistant",
                "All numerical chem benefits are halved.", 50, ORGANIC_SPECIES),
    Distinction("d7", "Civil to a Fault",
                "When you hear a FEAST count, you must pull a limit flag or health flag.", 75),
    Distinction("d8", "Combat Paralysis",
                "When entering any encounter, you are hit with stun.", 100),
    Distinction("d9", "Craven",
                "In combat you must attempt to leave quickly or pull a limit flag.", 100),
    Distinction("d10", "Cruel",
                "Near downed characters you must burn a limit flag or attempt a killing blow.", 50),
    Distinction("d11", "Cybernetic Rejection",
                "The drain value of any cyberware you have installed is tripled.", 50,
                ORGANIC_SPECIES),
    Distinction("d12", "Delicate",
                "Your dying count starts at 5 instead of 30.", 50),
    Distinction("d13", "Difficult Patient",
                "Surgery or maintenance on you is 2 harder.", 50, ORGANIC_SPECIES),
    Distinction("d14", "Easy Mark",
                "Near bandit faction members, you cannot use limit flags or count as fresh/spent.", 50),
    Distinction("d15", "Failsafe",
                "You cannot attack human-like characters unless they attack first.", 100,
                ROBOTIC_SPECIES),
    Distinction("d16", "Fear of the Dark",
                "When the sun is not visible, your max limit is lowered by one.", 50),
    Distinction("d17", "Fumble Fingers",
                "LOOTING, MEDIC, REPAIR, RECOVER and RELOAD counts are increased by 5.", 50),
    Distinction("d18", "Insufficient Funds",
                "No starter kit, and you lose 20 caps each event check-in.", 100),
    Distinction("d19", "It Came From Beyond",
                "Near invader faction members, you cannot use limit flags or count as fresh/spent.", 50,
                ORGANIC_SPECIES),
    Distinction("d20", "Light Sensitive",
                "When the sun is visible, your max limit is lowered by one.", 50),
    Distinction("d21", "Lightweight",
                "When using chems, you must make a RECOVER(30)(Res) count.", 50,
                ORGANIC_SPECIES),
    Distinction("d22", "Lone Wolf",
                "You cannot benefit from inspire calls or join a party/partner/ward system.", 50),
    Distinction("d23", "Loss Prevention.exe",
                "You cannot cause damage to bot faction members.", 50, ROBOTIC_SPECIES),
    Distinction("d24", "Paced", "You cannot run.", 150),
    Distinction("d25", "Pacifist", "Your attacks must include NO DAMAGE call.", 150),
    Distinction("d26", "Poison Vulnerable",
                "When hit with poison, you must burn a health flag.", 50, ORGANIC_SPECIES),
    Distinction("d27", "Prideful",
                "To leave combat encounters, you must burn all limit flags.", 50),
    Distinction("d28", "Rotten Luck",
                "You gain a bite card every event check-in.", 50, ORGANIC_SPECIES),
    Distinction("d29", "Speechless",
                "You may only speak for counts, calls, damage reactions, or commanded responses.", 100),
    Distinction("d30", "The Future is Scary",
                "Near bot faction members, you cannot use limit flags or count as fresh/spent.", 50),
    Distinction("d31", "Turned Averse",
                "Near turned faction members, you cannot use limit flags or count as fresh/spent.", 50),
]


# =============================================================================
# CATALOG
# =============================================================================

@dataclass(frozen=True)
class Catalog:
    """
    Bundle of all static reference tables.

    Dicts preserve declaration order, which is the tie-break order
    for frequency listings.
    """
    species: Dict[str, SpeciesStats]
    perks: Dict[str, Perk]
    distinctions: Dict[str, Distinction]
    recipes: Dict[str, Recipe]
    tag_bonuses: Dict[PerkTag, List[TagScoreBonus]]


def build_catalog(
    species: Dict[str, SpeciesStats],
    perks: List[Perk],
    distinctions: Optional[List[Distinction]] = None,
    recipes: Optional[List[Recipe]] = None,
    tag_bonuses: Optional[Dict[PerkTag, List[TagScoreBonus]]] = None,
) -> Catalog:
    """Build a Catalog from declaration-ordered lists."""
    return Catalog(
        species=dict(species),
        perks={perk.perk_id: perk for perk in perks},
        distinctions={d.distinction_id: d for d in (distinctions or [])},
        recipes={r.recipe_id: r for r in (recipes or [])},
        tag_bonuses=dict(tag_bonuses if tag_bonuses is not None else TAG_SCORE_BONUSES),
    )


_DEFAULT_CATALOG = build_catalog(
    species=SPECIES_BASE_STATS,
    perks=AVAILABLE_PERKS,
    distinctions=AVAILABLE_DISTINCTIONS,
    recipes=AVAILABLE_RECIPES,
    tag_bonuses=TAG_SCORE_BONUSES,
)

# Active catalog (can be replaced at runtime)
_active_catalog: Catalog = _DEFAULT_CATALOG


def get_catalog() -> Catalog:
    """Get the active catalog."""
    return _active_catalog


def set_catalog(catalog: Catalog) -> None:
    """Set the active catalog."""
    global _active_catalog
    _active_catalog = catalog


def reset_catalog() -> None:
    """Reset to the built-in catalog."""
    global _active_catalog
    _active_catalog = _DEFAULT_CATALOG


def get_default_catalog() -> Catalog:
    return _DEFAULT_CATALOG
