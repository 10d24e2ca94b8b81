"""
Loading-boundary adapters: stored records -> entities.

The storage layer keeps camelCase JSON records, some written by older
app versions ("Allied"/"Friendly" standings, healthModifier keys).
Everything is folded into canonical types here so the calculators
only ever compare Standing members.
"""

import logging
from typing import Any, Dict, List, Union

from campaign.stats.core import (
    Character,
    Cyberware,
    CyberwareModifiers,
    Faction,
    FactionRelationship,
    FactionStanding,
    PerkTag,
    Relationship,
    Standing,
)
from campaign.stats.validation import RosterFormatError

logger = logging.getLogger(__name__)


_STANDING_ALIASES: Dict[str, Standing] = {
    "ally": Standing.ALLY,
    "allied": Standing.ALLY,
    "friend": Standing.FRIEND,
    "friendly": Standing.FRIEND,
    "neutral": Standing.NEUTRAL,
    "hostile": Standing.HOSTILE,
    "enemy": Standing.ENEMY,
}

_TAGS_BY_NAME: Dict[str, PerkTag] = {tag.value.lower(): tag for tag in PerkTag}


def normalize_standing(value: Union[str, Standing]) -> Standing:
    """
    Map a stored standing to its canonical Standing.

    Accepts Standing members, canonical names and legacy aliases,
    case-insensitively. Unrecognised values become NEUTRAL.
    """
    if isinstance(value, Standing):
        return value
    standing = _STANDING_ALIASES.get(str(value).strip().lower())
    if standing is None:
        logger.warning("Unrecognised standing %r, treating as Neutral", value)
        return Standing.NEUTRAL
    return standing


def _normalize_tag_modifiers(data: Dict[str, Any]) -> Dict[PerkTag, int]:
    result = {}
    for name, amount in data.items():
        tag = _TAGS_BY_NAME.get(str(name).lower())
        if tag is None:
            logger.warning("Ignoring cyberware modifier for unknown tag %r", name)
            continue
        result[tag] = int(amount)
    return result


def cyberware_from_dict(data: Dict[str, Any]) -> Cyberware:
    """
    Decode one cyberware item.

    Both the current keys (health, limit) and the older
    *Modifier keys (healthModifier, healthCapModifier, ...) are read.

    Raises:
        RosterFormatError: If the item or a modifier value is malformed
    """
    try:
        mods = data.get("statModifiers") or {}
        return Cyberware(
            name=data.get("name", ""),
            description=data.get("description", ""),
            stat_modifiers=CyberwareModifiers(
                health=int(mods.get("health", 0)) + int(mods.get("healthModifier", 0)),
                limit=int(mods.get("limit", 0)) + int(mods.get("limitModifier", 0)),
                health_cap=int(mods.get("healthCap", 0)) + int(mods.get("healthCapModifier", 0)),
                limit_cap=int(mods.get("limitCap", 0)) + int(mods.get("limitCapModifier", 0)),
                tag_modifiers=_normalize_tag_modifiers(mods.get("tagModifiers") or {}),
            ),
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise RosterFormatError(f"Malformed cyberware record {data!r}: {e}") from e


def character_from_dict(data: Dict[str, Any]) -> Character:
    """
    Decode a stored character record.

    Raises:
        RosterFormatError: If the record is not a mapping, lacks
            id/name/species, or has a malformed nested entry
    """
    if not isinstance(data, dict):
        raise RosterFormatError(f"Character record must be a dict, got {type(data).__name__}")

    try:
        character_id = str(data["id"])
        name = data["name"]
        species = data["species"]
    except KeyError as e:
        raise RosterFormatError(f"Character record missing required field {e}") from e

    try:
        factions = [
            FactionStanding(name=f["name"], standing=normalize_standing(f["standing"]))
            for f in data.get("factions") or []
        ]
        relationships = [
            Relationship(
                character_name=r["characterName"],
                relationship_type=normalize_standing(r["relationshipType"]),
                description=r.get("description") or "",
            )
            for r in data.get("relationships") or []
        ]
    except (KeyError, TypeError, AttributeError) as e:
        raise RosterFormatError(
            f"Character '{name}' has a malformed faction or relationship entry: {e!r}"
        ) from e

    return Character(
        character_id=character_id,
        name=name,
        species=species,
        perk_ids=list(data.get("perkIds") or []),
        distinction_ids=list(data.get("distinctionIds") or []),
        factions=factions,
        relationships=relationships,
        cyberware=[cyberware_from_dict(c) for c in data.get("cyberware") or []],
        present=bool(data.get("present", False)),
        retired=bool(data.get("retired", False)),
    )


def _faction_relationship_from_dict(faction_name: str, rel: Dict[str, Any]) -> FactionRelationship:
    if not isinstance(rel, dict) or "factionName" not in rel:
        raise RosterFormatError(
            f"Faction '{faction_name}' has a relationship without a factionName: {rel!r}"
        )
    raw = rel.get("standing", rel.get("relationshipType"))
    if raw is None:
        raise RosterFormatError(
            f"Faction '{faction_name}' relationship to {rel['factionName']!r} has no standing"
        )
    return FactionRelationship(faction_name=rel["factionName"], standing=normalize_standing(raw))


def faction_from_dict(data: Dict[str, Any]) -> Faction:
    """
    Decode a stored faction record.

    Faction relationships may use either "standing" or the older
    "relationshipType" key.

    Raises:
        RosterFormatError: If the record lacks a name or a relationship
            lacks its factionName or standing
    """
    if not isinstance(data, dict) or "name" not in data:
        raise RosterFormatError("Faction record must be a dict with a name")

    relationships = [
        _faction_relationship_from_dict(data["name"], rel)
        for rel in data.get("relationships") or []
    ]

    return Faction(
        name=data["name"],
        description=data.get("description") or "",
        relationships=relationships,
        retired=bool(data.get("retired", False)),
    )


def load_roster(records: List[Dict[str, Any]]) -> List[Character]:
    """Decode a list of stored character records, preserving order."""
    return [character_from_dict(record) for record in records]


def load_factions(records: List[Dict[str, Any]]) -> List[Faction]:
    """Decode a list of stored faction records, preserving order."""
    return [faction_from_dict(record) for record in records]


def faction_relationships_map(factions: List[Faction]) -> Dict[str, List[FactionRelationship]]:
    """Index faction-to-faction standings by faction name."""
    return {faction.name: list(faction.relationships) for faction in factions}
