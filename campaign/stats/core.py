"""
Core data structures for the campaign statistics engine.

Entities are handed in already loaded by the storage layer;
derived results are recomputed on demand and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional


class Standing(str, Enum):
    """
    Relationship quality, ordered from most to least positive.

    Used for character->faction, character->character and
    faction->faction links alike.
    """
    ALLY = "Ally"
    FRIEND = "Friend"
    NEUTRAL = "Neutral"
    HOSTILE = "Hostile"
    ENEMY = "Enemy"

    @property
    def is_positive(self) -> bool:
        return self in (Standing.ALLY, Standing.FRIEND)

    @property
    def is_negative(self) -> bool:
        return self in (Standing.HOSTILE, Standing.ENEMY)


class PerkTag(str, Enum):
    """The twelve perk categories used for specialization scores."""
    AGILITY = "Agility"
    CHARISMA = "Charisma"
    CRAFTING = "Crafting"
    DEFENSE = "Defense"
    ENDURANCE = "Endurance"
    FINESSE = "Finesse"
    GRIT = "Grit"
    MEDICAL = "Medical"
    SMARTS = "Smarts"
    STRENGTH = "Strength"
    TEAMWORK = "Teamwork"
    TECHNICAL = "Technical"


# =============================================================================
# STATIC CATALOG ENTRIES
# =============================================================================

@dataclass(frozen=True)
class StatModifiers:
    """Flat health/limit adjustment carried by a perk."""
    health: int = 0
    limit: int = 0


@dataclass(frozen=True)
class SpeciesStats:
    """Base values and ceilings for one species."""
    base_health: int
    base_limit: int
    health_cap: int
    limit_cap: int
    can_use_cyberware: bool = True
    can_use_chems: bool = True
    can_take_injuries: bool = True
    can_take_malfunctions: bool = False


@dataclass(frozen=True)
class Recipe:
    recipe_id: str
    name: str
    description: str
    materials: tuple = ()


@dataclass(frozen=True)
class Perk:
    """
    A purchasable perk.

    allowed_species of None means the perk is open to every species.
    """
    perk_id: str
    name: str
    description: str
    tag: PerkTag
    stat_modifiers: Optional[StatModifiers] = None
    allowed_species: Optional[FrozenSet[str]] = None
    recipe_ids: tuple = ()


@dataclass(frozen=True)
class Distinction:
    distinction_id: str
    name: str
    description: str
    xp_bonus: int = 0
    allowed_species: Optional[FrozenSet[str]] = None


@dataclass(frozen=True)
class TagScoreBonus:
    """One threshold on a tag's bonus ladder."""
    required_score: int
    health: int = 0
    limit: int = 0


# =============================================================================
# CAMPAIGN ENTITIES
# =============================================================================

@dataclass
class CyberwareModifiers:
    """
    Modifiers granted by an installed cyberware item.

    health_cap / limit_cap raise the species ceiling rather than the total.
    tag_modifiers shift a tag's effective score before bonus thresholds.
    """
    health: int = 0
    limit: int = 0
    health_cap: int = 0
    limit_cap: int = 0
    tag_modifiers: Dict[PerkTag, int] = field(default_factory=dict)


@dataclass
class Cyberware:
    name: str
    description: str = ""
    stat_modifiers: CyberwareModifiers = field(default_factory=CyberwareModifiers)


@dataclass
class FactionStanding:
    """A character's entry for one faction."""
    name: str
    standing: Standing


@dataclass
class Relationship:
    """Outgoing edge from one character to another, keyed by name."""
    character_name: str
    relationship_type: Standing
    description: str = ""


@dataclass
class Character:
    """
    A campaign character as loaded from storage.

    Membership in a faction is derived: only a positive standing
    entry counts. Relationships are the character's outgoing edges.
    """
    character_id: str
    name: str
    species: str
    perk_ids: List[str] = field(default_factory=list)
    distinction_ids: List[str] = field(default_factory=list)
    factions: List[FactionStanding] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)
    cyberware: List[Cyberware] = field(default_factory=list)
    present: bool = False
    retired: bool = False

    def standing_for(self, faction_name: str) -> Optional[Standing]:
        """Standing toward a faction, or None if there is no entry."""
        for entry in self.factions:
            if entry.name == faction_name:
                return entry.standing
        return None

    def is_member_of(self, faction_name: str) -> bool:
        standing = self.standing_for(faction_name)
        return standing is not None and standing.is_positive


@dataclass
class FactionRelationship:
    """A faction's declared standing toward another faction."""
    faction_name: str
    standing: Standing


@dataclass
class Faction:
    name: str
    description: str = ""
    relationships: List[FactionRelationship] = field(default_factory=list)
    retired: bool = False
