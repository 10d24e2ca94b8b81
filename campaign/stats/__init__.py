"""
Campaign Stats - derived statistics and influence analysis

Pure computations over an in-memory roster snapshot: per-character
derived stats, faction roll-ups, and relationship-graph influence.
The storage layer loads entities; screens render the results.
"""

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
from campaign.stats.catalog import (
    Catalog,
    get_catalog,
    set_catalog,
    reset_catalog,
)
from campaign.stats.derived import (
    DerivedStats,
    calculate_derived_stats,
    safe_derived_stats,
)
from campaign.stats.roster import (
    CharacterStats,
    calculate_character_stats,
)
from campaign.stats.factions import (
    FactionStats,
    CombinedFactionAnalysis,
    calculate_faction_stats,
    calculate_combined_faction_stats,
    get_all_faction_stats,
    bar_width_percentage,
)
from campaign.stats.influence import (
    CharacterInfluence,
    FactionInfluence,
    PowerCenter,
    calculate_character_influence,
    get_top_influencers,
    analyze_faction_influence,
    build_relationship_network,
    find_faction_connections,
    find_mutual_relationships,
    find_key_connectors,
    find_power_centers,
)
from campaign.stats.validation import (
    CatalogValidationError,
    RosterFormatError,
    validate_catalog,
    check_perk_eligibility,
)
from campaign.stats.normalization import (
    normalize_standing,
    load_roster,
    load_factions,
)

__all__ = [
    # Core data structures
    "Character",
    "Cyberware",
    "CyberwareModifiers",
    "Faction",
    "FactionRelationship",
    "FactionStanding",
    "PerkTag",
    "Relationship",
    "Standing",
    # Catalog
    "Catalog",
    "get_catalog",
    "set_catalog",
    "reset_catalog",
    # Derived stats
    "DerivedStats",
    "calculate_derived_stats",
    "safe_derived_stats",
    # Roster
    "CharacterStats",
    "calculate_character_stats",
    # Factions
    "FactionStats",
    "CombinedFactionAnalysis",
    "calculate_faction_stats",
    "calculate_combined_faction_stats",
    "get_all_faction_stats",
    "bar_width_percentage",
    # Influence
    "CharacterInfluence",
    "FactionInfluence",
    "PowerCenter",
    "calculate_character_influence",
    "get_top_influencers",
    "analyze_faction_influence",
    "build_relationship_network",
    "find_faction_connections",
    "find_mutual_relationships",
    "find_key_connectors",
    "find_power_centers",
    # Validation
    "CatalogValidationError",
    "RosterFormatError",
    "validate_catalog",
    "check_perk_eligibility",
    # Loading boundary
    "normalize_standing",
    "load_roster",
    "load_factions",
]
