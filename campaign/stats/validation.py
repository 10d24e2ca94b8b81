"""
Validation for catalogs and loaded rosters.

Ensures:
1. Every tag has a bonus ladder with strictly ascending thresholds
2. Perk recipe references resolve
3. Species gates name known species

Pure stat calculations never call these; they fail soft instead.
Validation runs at load time and in the test suite.
"""

from typing import FrozenSet, List, Optional, Tuple

from campaign.stats.catalog import Catalog, get_catalog
from campaign.stats.core import Character, PerkTag


# =============================================================================
# VALIDATION ERRORS
# =============================================================================

class CatalogValidationError(Exception):
    """Raised when catalog validation fails."""
    pass


class UnknownTagError(CatalogValidationError):
    """Raised when a tag has no bonus ladder or a perk uses an unknown tag."""
    pass


class ThresholdOrderError(CatalogValidationError):
    """Raised when a bonus ladder is not strictly ascending."""
    pass


class DanglingReferenceError(CatalogValidationError):
    """Raised when a catalog entry references an id that does not exist."""
    pass


class RosterFormatError(ValueError):
    """Raised when a stored record cannot be turned into an entity."""
    pass


# =============================================================================
# CATALOG VALIDATION
# =============================================================================

def validate_tag_bonuses(catalog: Catalog) -> None:
    """
    Check that every tag has a strictly ascending bonus ladder.

    Raises:
        UnknownTagError: If a tag has no ladder
        ThresholdOrderError: If thresholds are unordered or non-positive
    """
    for tag in PerkTag:
        if tag not in catalog.tag_bonuses:
            raise UnknownTagError(f"Tag '{tag.value}' has no bonus ladder")

        previous = 0
        for bonus in catalog.tag_bonuses[tag]:
            if bonus.required_score <= previous:
                raise ThresholdOrderError(
                    f"Tag '{tag.value}' threshold {bonus.required_score} must be "
                    f"greater than {previous}"
                )
            previous = bonus.required_score


def validate_perk(perk_id: str, catalog: Catalog) -> None:
    """
    Validate one perk's tag, recipes and species gate.

    Raises:
        UnknownTagError: If the perk's tag is not a PerkTag
        DanglingReferenceError: If a recipe or species reference is unknown
    """
    perk = catalog.perks[perk_id]

    if not isinstance(perk.tag, PerkTag):
        raise UnknownTagError(f"Perk '{perk_id}' uses unknown tag '{perk.tag}'")

    for recipe_id in perk.recipe_ids:
        if recipe_id not in catalog.recipes:
            raise DanglingReferenceError(
                f"Perk '{perk_id}' references unknown recipe '{recipe_id}'"
            )

    _validate_species_gate(perk_id, perk.allowed_species, catalog)


def _validate_species_gate(
    entry_id: str,
    allowed_species: Optional[FrozenSet[str]],
    catalog: Catalog
) -> None:
    if allowed_species is None:
        return
    unknown = sorted(s for s in allowed_species if s not in catalog.species)
    if unknown:
        raise DanglingReferenceError(
            f"Entry '{entry_id}' is gated to unknown species: {unknown}"
        )


def validate_catalog(catalog: Optional[Catalog] = None) -> None:
    """
    Validate a complete catalog, collecting every problem.

    Args:
        catalog: Catalog to check (default: active catalog)

    Raises:
        CatalogValidationError: If any check fails
    """
    if catalog is None:
        catalog = get_catalog()

    errors = []

    try:
        validate_tag_bonuses(catalog)
    except CatalogValidationError as e:
        errors.append(str(e))

    for perk_id in catalog.perks:
        try:
            validate_perk(perk_id, catalog)
        except CatalogValidationError as e:
            errors.append(str(e))

    for distinction_id, distinction in catalog.distinctions.items():
        try:
            _validate_species_gate(distinction_id, distinction.allowed_species, catalog)
        except CatalogValidationError as e:
            errors.append(str(e))

    if errors:
        raise CatalogValidationError(
            f"Catalog validation failed with {len(errors)} errors:\n" +
            "\n".join(f"  - {e}" for e in errors)
        )


# =============================================================================
# ROSTER CHECKS
# =============================================================================

def check_perk_eligibility(
    character: Character,
    catalog: Optional[Catalog] = None
) -> List[str]:
    """
    List perk and distinction ids the character's species may not carry.

    Used at data-entry time; the calculators do not re-validate.

    Returns:
        Offending ids in the character's own order
    """
    if catalog is None:
        catalog = get_catalog()

    violations = []
    for perk_id in character.perk_ids:
        perk = catalog.perks.get(perk_id)
        if perk and perk.allowed_species is not None \
                and character.species not in perk.allowed_species:
            violations.append(perk_id)

    for distinction_id in character.distinction_ids:
        distinction = catalog.distinctions.get(distinction_id)
        if distinction and distinction.allowed_species is not None \
                and character.species not in distinction.allowed_species:
            violations.append(distinction_id)

    return violations


def find_asymmetric_relationships(
    characters: List[Character]
) -> List[Tuple[str, str]]:
    """
    Find relationship edges A->B with no reciprocal B->A entry.

    The storage layer maintains the reciprocal on every write,
    so a consistent snapshot returns an empty list. Edges to
    characters missing from the roster are reported too.

    Returns:
        (from_name, to_name) pairs, in roster order
    """
    edges = {
        (character.name, rel.character_name)
        for character in characters
        for rel in character.relationships
    }

    missing = []
    for character in characters:
        for rel in character.relationships:
            if (rel.character_name, character.name) not in edges:
                missing.append((character.name, rel.character_name))
    return missing
