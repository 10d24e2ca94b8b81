"""
Pytest configuration for campaign stats tests.
"""

import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# =============================================================================
# VALIDATION ON TEST RUN
# =============================================================================

def pytest_configure(config):
    """
    Validate the built-in catalog before running tests.

    A broken bonus ladder or dangling recipe surfaces as a
    collection failure instead of odd stat totals.
    """
    from campaign.stats.catalog import get_default_catalog
    from campaign.stats.validation import CatalogValidationError, validate_catalog

    try:
        validate_catalog(get_default_catalog())
    except CatalogValidationError as e:
        pytest.fail(f"Catalog validation failed:\n{e}", pytrace=False)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture(autouse=True)
def default_settings():
    """Every test starts and ends on the default config and catalog."""
    from campaign.stats.catalog import reset_catalog
    from campaign.stats.config import reset_config

    reset_config()
    reset_catalog()
    yield
    reset_config()
    reset_catalog()


@pytest.fixture
def test_catalog():
    """Small catalog with generous caps (Human 10/5, caps 100)."""
    from tests.helpers import make_test_catalog
    return make_test_catalog()
