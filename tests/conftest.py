"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tests.fixtures.test_inputs import (
    get_reference_assumptions,
    get_full_cost_assumptions,
)


@pytest.fixture
def reference_assumptions():
    """Reference 20-unit project, no scenario deltas."""
    return get_reference_assumptions()


@pytest.fixture
def full_cost_assumptions():
    """Reference project with contingency, developer fee and other revenue."""
    return get_full_cost_assumptions()
