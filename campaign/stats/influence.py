"""
Influence analysis over the character relationship graph.

Per-character influence is a weighted sum:

    score = w_rel * relationships + w_pos * positive relationships
          + w_fac * faction entries + w_conn * distinct connections

Weights come from config and are non-negative, so the score never
drops when any of the four inputs grows, and a character with no
relationships and no factions scores 0.

Connections are characters named in the character's own relationships
plus everyone sharing a faction where both hold a positive standing.
Relationships are read as stored (outgoing edges); the storage layer
keeps them reciprocal.

Rankings break score ties by name, ascending.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from campaign.stats.config import get_config
from campaign.stats.core import Character, Faction, Standing


@dataclass
class CharacterInfluence:
    character: Character
    influence_score: float
    relationship_count: int
    positive_relationships: int
    negative_relationships: int
    faction_count: int
    factions: List[str] = field(default_factory=list)
    connections: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.character.name


@dataclass
class FactionInfluence:
    name: str
    member_count: int
    total_influence: float
    average_influence: float
    members: List[CharacterInfluence] = field(default_factory=list)  # by influence, descending
    allies: List[str] = field(default_factory=list)
    enemies: List[str] = field(default_factory=list)


@dataclass
class PowerCenter:
    """A character ranked by the base influence of its positive contacts."""
    influence: CharacterInfluence
    ally_influence: float
    influential_allies: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.influence.character.name


@dataclass
class RelationshipNetwork:
    character: Character
    allies: List[Character] = field(default_factory=list)
    friends: List[Character] = field(default_factory=list)
    neutral: List[Character] = field(default_factory=list)
    hostile: List[Character] = field(default_factory=list)
    enemies: List[Character] = field(default_factory=list)


@dataclass
class MutualRelationship:
    first: Character
    second: Character
    first_standing: Standing
    second_standing: Standing


# =============================================================================
# BASE INFLUENCE
# =============================================================================

def _membership_index(characters: List[Character]) -> Dict[str, List[str]]:
    """Faction name -> names of its members, by Character.is_member_of."""
    index: Dict[str, List[str]] = {}
    for character in characters:
        for entry in character.factions:
            members = index.setdefault(entry.name, [])
            if character.is_member_of(entry.name) and character.name not in members:
                members.append(character.name)
    return index


def _by_name(characters: List[Character]) -> Dict[str, Character]:
    """Name lookup; the first character with a given name wins."""
    lookup: Dict[str, Character] = {}
    for character in characters:
        lookup.setdefault(character.name, character)
    return lookup


def _connections(character: Character, index: Dict[str, List[str]]) -> Set[str]:
    connections = {rel.character_name for rel in character.relationships}
    for entry in character.factions:
        if character.is_member_of(entry.name):
            connections.update(index.get(entry.name, []))
    connections.discard(character.name)
    return connections


def _influence(character: Character, index: Dict[str, List[str]]) -> CharacterInfluence:
    weights = get_config().influence

    relationship_count = len(character.relationships)
    positive = sum(1 for r in character.relationships if r.relationship_type.is_positive)
    negative = sum(1 for r in character.relationships if r.relationship_type.is_negative)
    faction_count = len(character.factions)
    connections = _connections(character, index)

    score = (
        weights.relationship * relationship_count +
        weights.positive_relationship * positive +
        weights.faction * faction_count +
        weights.connection * len(connections)
    )

    return CharacterInfluence(
        character=character,
        influence_score=score,
        relationship_count=relationship_count,
        positive_relationships=positive,
        negative_relationships=negative,
        faction_count=faction_count,
        factions=[entry.name for entry in character.factions],
        connections=sorted(connections),
    )


def calculate_character_influence(
    character: Character,
    all_characters: List[Character]
) -> CharacterInfluence:
    """
    Compute one character's influence against the full roster.

    Faction co-membership needs the whole roster, so all_characters
    is scanned even for a single character.
    """
    return _influence(character, _membership_index(all_characters))


def calculate_all_influences(characters: List[Character]) -> List[CharacterInfluence]:
    """Influence for every character, in roster order."""
    index = _membership_index(characters)
    return [_influence(character, index) for character in characters]


def _rank_key(influence: CharacterInfluence) -> Tuple[float, str]:
    return (-influence.influence_score, influence.character.name)


def get_top_influencers(
    characters: List[Character],
    limit: int = 10
) -> List[CharacterInfluence]:
    """
    The most influential characters, highest score first.

    Returns at most limit entries; characters scoring 0 are kept.
    """
    if limit <= 0:
        return []
    return sorted(calculate_all_influences(characters), key=_rank_key)[:limit]


# =============================================================================
# FACTION INFLUENCE
# =============================================================================

def _inferred_stances(
    faction_name: str,
    members: List[Character]
) -> Tuple[List[str], List[str]]:
    # Without declared faction standings, members' other entries stand in.
    allies: List[str] = []
    enemies: List[str] = []
    for member in members:
        for entry in member.factions:
            if entry.name == faction_name:
                continue
            if entry.standing.is_positive and entry.name not in allies:
                allies.append(entry.name)
            elif entry.standing.is_negative and entry.name not in enemies:
                enemies.append(entry.name)
    return allies, enemies


def _declared_stances(faction: Faction) -> Tuple[List[str], List[str]]:
    allies: List[str] = []
    enemies: List[str] = []
    for rel in faction.relationships:
        if rel.faction_name == faction.name:
            continue
        if rel.standing.is_positive and rel.faction_name not in allies:
            allies.append(rel.faction_name)
        elif rel.standing.is_negative and rel.faction_name not in enemies:
            enemies.append(rel.faction_name)
    return allies, enemies


def analyze_faction_influence(
    characters: List[Character],
    factions: Optional[List[Faction]] = None
) -> List[FactionInfluence]:
    """
    Aggregate member influence per faction.

    Every faction named by a character entry or in factions is
    reported, including factions with no members (average 0.0).
    Allies/enemies come from the faction's declared standings when
    the faction is given, otherwise from its members' other entries.

    Returns:
        FactionInfluence list sorted by total influence, descending,
        ties by name
    """
    declared = {faction.name: faction for faction in factions or []}

    names: List[str] = list(declared)
    for character in characters:
        for entry in character.factions:
            if entry.name not in declared and entry.name not in names:
                names.append(entry.name)

    influences = calculate_all_influences(characters)

    results = []
    for name in names:
        member_influences = sorted(
            (inf for inf in influences if inf.character.is_member_of(name)),
            key=_rank_key,
        )
        total = sum(inf.influence_score for inf in member_influences)
        count = len(member_influences)

        if name in declared:
            allies, enemies = _declared_stances(declared[name])
        else:
            allies, enemies = _inferred_stances(
                name, [inf.character for inf in member_influences]
            )

        results.append(FactionInfluence(
            name=name,
            member_count=count,
            total_influence=total,
            average_influence=total / count if count > 0 else 0.0,
            members=member_influences,
            allies=allies,
            enemies=enemies,
        ))

    return sorted(results, key=lambda f: (-f.total_influence, f.name))


# =============================================================================
# NETWORK QUERIES
# =============================================================================

def build_relationship_network(
    character: Character,
    all_characters: List[Character]
) -> RelationshipNetwork:
    """Group a character's related characters by relationship standing."""
    lookup = _by_name(all_characters)
    network = RelationshipNetwork(character=character)
    buckets = {
        Standing.ALLY: network.allies,
        Standing.FRIEND: network.friends,
        Standing.NEUTRAL: network.neutral,
        Standing.HOSTILE: network.hostile,
        Standing.ENEMY: network.enemies,
    }
    for rel in character.relationships:
        related = lookup.get(rel.character_name)
        if related is not None:
            buckets[rel.relationship_type].append(related)
    return network


def find_faction_connections(
    character: Character,
    all_characters: List[Character]
) -> Dict[str, List[Character]]:
    """
    For each faction the character has an entry for, the other
    characters with an entry for it (any standing).

    Factions nobody else shares are omitted.
    """
    connections: Dict[str, List[Character]] = {}
    for entry in character.factions:
        others = [
            other for other in all_characters
            if other.character_id != character.character_id
            and other.standing_for(entry.name) is not None
        ]
        if others:
            connections[entry.name] = others
    return connections


def find_mutual_relationships(characters: List[Character]) -> List[MutualRelationship]:
    """Every reciprocated relationship pair, each listed once."""
    lookup = _by_name(characters)
    seen: Set[frozenset] = set()
    mutual = []

    for first in characters:
        for rel in first.relationships:
            second = lookup.get(rel.character_name)
            if second is None or second.character_id == first.character_id:
                continue
            reverse = next(
                (r for r in second.relationships if r.character_name == first.name),
                None,
            )
            if reverse is None:
                continue
            pair = frozenset((first.character_id, second.character_id))
            if pair in seen:
                continue
            seen.add(pair)
            mutual.append(MutualRelationship(
                first=first,
                second=second,
                first_standing=rel.relationship_type,
                second_standing=reverse.relationship_type,
            ))

    return mutual


def find_key_connectors(
    characters: List[Character],
    limit: int = 5
) -> List[CharacterInfluence]:
    """
    Characters bridging several factions.

    Candidates have at least key_connectors.min_factions faction
    entries and min_relationships relationships. Ranked by
    faction_count * faction_weight + relationship_count, ties by name.
    """
    if limit <= 0:
        return []
    config = get_config().key_connectors

    candidates = [
        inf for inf in calculate_all_influences(characters)
        if inf.faction_count >= config.min_factions
        and inf.relationship_count >= config.min_relationships
    ]

    def composite(inf: CharacterInfluence) -> Tuple[int, str]:
        score = inf.faction_count * config.faction_weight + inf.relationship_count
        return (-score, inf.character.name)

    return sorted(candidates, key=composite)[:limit]


def find_power_centers(
    characters: List[Character],
    limit: int = 5
) -> List[PowerCenter]:
    """
    Characters whose positive contacts are themselves influential.

    Two passes: base influence for everyone, then for each character
    the sum of base influence over its distinct Ally/Friend contacts
    present in the roster. One hop only; the secondary score is never
    fed back in.

    Characters need at least one such contact and
    power_centers.min_ally_influence. Ranked by ally influence, then
    own influence, then name.
    """
    if limit <= 0:
        return []
    threshold = get_config().power_centers.min_ally_influence

    influences = calculate_all_influences(characters)
    base_by_name: Dict[str, CharacterInfluence] = {}
    for inf in influences:
        base_by_name.setdefault(inf.character.name, inf)

    centers = []
    for inf in influences:
        allies: List[str] = []
        for rel in inf.character.relationships:
            name = rel.character_name
            if (rel.relationship_type.is_positive and name in base_by_name
                    and name != inf.character.name and name not in allies):
                allies.append(name)
        if not allies:
            continue

        ally_influence = sum(base_by_name[name].influence_score for name in allies)
        if ally_influence < threshold:
            continue

        centers.append(PowerCenter(
            influence=inf,
            ally_influence=ally_influence,
            influential_allies=sorted(
                allies, key=lambda n: (-base_by_name[n].influence_score, n)
            ),
        ))

    centers.sort(key=lambda pc: (-pc.ally_influence, -pc.influence.influence_score, pc.name))
    return centers[:limit]
