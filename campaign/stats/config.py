"""
Configuration for the campaign statistics engine.

All tunable weights and thresholds live here, not in code.
Defaults mirror config/stats_defaults.yaml.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union

import yaml


@dataclass
class InfluenceWeights:
    """Weights for the per-character influence score. All must be >= 0."""
    relationship: float
    positive_relationship: float
    faction: float
    connection: float


@dataclass
class KeyConnectorConfig:
    """Who counts as a bridge between factions."""
    min_factions: int
    min_relationships: int
    faction_weight: int  # composite = faction_count * weight + relationship_count


@dataclass
class PowerCenterConfig:
    """Power centers must have at least this much allied influence."""
    min_ally_influence: float


@dataclass
class FactionReportConfig:
    """Faction stats screen settings."""
    common_limit: int
    combined_tag_limit: int
    bar_floor_percent: float


@dataclass
class RosterReportConfig:
    """Roster-wide character stats settings."""
    common_limit: int


@dataclass
class StatsConfig:
    """Complete engine configuration."""
    influence: InfluenceWeights
    key_connectors: KeyConnectorConfig
    power_centers: PowerCenterConfig
    faction_report: FactionReportConfig
    roster_report: RosterReportConfig


# Default configuration - matches config/stats_defaults.yaml
_DEFAULT_CONFIG = StatsConfig(
    influence=InfluenceWeights(
        relationship=1.0,
        positive_relationship=2.0,
        faction=5.0,
        connection=1.0,
    ),
    key_connectors=KeyConnectorConfig(
        min_factions=2,
        min_relationships=0,
        faction_weight=10,
    ),
    power_centers=PowerCenterConfig(
        min_ally_influence=0.0,
    ),
    faction_report=FactionReportConfig(
        common_limit=5,
        combined_tag_limit=8,
        bar_floor_percent=5.0,
    ),
    roster_report=RosterReportConfig(
        common_limit=5,
    ),
)

# Active configuration (can be replaced at runtime)
_active_config: StatsConfig = _DEFAULT_CONFIG


def get_config() -> StatsConfig:
    """Get the active engine configuration."""
    return _active_config


def set_config(config: StatsConfig) -> None:
    """Set the active engine configuration."""
    global _active_config
    _active_config = config


def reset_config() -> None:
    """Reset to default configuration."""
    global _active_config
    _active_config = _DEFAULT_CONFIG


# =============================================================================
# YAML LOADING
# =============================================================================

def _require(data: Dict[str, Any], key: str, path: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise ValueError(f"Missing required field: {path}{key}")
    return data[key]


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = _require(data, key, "")
    if not isinstance(section, dict):
        raise ValueError(f"Section '{key}' must be a dictionary")
    return section


def load_config_from_yaml(path: Union[str, Path]) -> StatsConfig:
    """
    Load a StatsConfig from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the YAML is malformed or a field is missing
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("YAML root must be a dictionary")

    influence = _section(data, "influence")
    connectors = _section(data, "key_connectors")
    centers = _section(data, "power_centers")
    faction_report = _section(data, "faction_report")
    roster_report = _section(data, "roster_report")

    return StatsConfig(
        influence=InfluenceWeights(
            relationship=float(_require(influence, "relationship", "influence.")),
            positive_relationship=float(
                _require(influence, "positive_relationship", "influence.")
            ),
            faction=float(_require(influence, "faction", "influence.")),
            connection=float(_require(influence, "connection", "influence.")),
        ),
        key_connectors=KeyConnectorConfig(
            min_factions=int(_require(connectors, "min_factions", "key_connectors.")),
            min_relationships=int(
                _require(connectors, "min_relationships", "key_connectors.")
            ),
            faction_weight=int(_require(connectors, "faction_weight", "key_connectors.")),
        ),
        power_centers=PowerCenterConfig(
            min_ally_influence=float(
                _require(centers, "min_ally_influence", "power_centers.")
            ),
        ),
        faction_report=FactionReportConfig(
            common_limit=int(_require(faction_report, "common_limit", "faction_report.")),
            combined_tag_limit=int(
                _require(faction_report, "combined_tag_limit", "faction_report.")
            ),
            bar_floor_percent=float(
                _require(faction_report, "bar_floor_percent", "faction_report.")
            ),
        ),
        roster_report=RosterReportConfig(
            common_limit=int(_require(roster_report, "common_limit", "roster_report.")),
        ),
    )
