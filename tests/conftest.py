"""
Pytest configuration for plate_planner tests.
"""
import sys
import os
import pytest

# Add src directory to Python path so tests can import plate_planner modules
src_path = os.path.abspath(os.path.join(os.path.dirname(__file__), "../src"))
sys.path.insert(0, src_path)


# ==============================================================================
# Plate Format Fixtures
# ==============================================================================

@pytest.fixture
def plate_96():
    from plate_planner.plate_formats import PLATE_FORMATS
    return PLATE_FORMATS[96]


@pytest.fixture
def plate_6():
    from plate_planner.plate_formats import PLATE_FORMATS
    return PLATE_FORMATS[6]


# ==============================================================================
# Randomness Fixtures
# ==============================================================================

class FixedIntegers:
    """Stand-in generator: ``integers`` always returns the same draw (clipped)."""

    def __init__(self, value=0):
        self.value = value
        self.calls = []

    def integers(self, low, high):
        self.calls.append((low, high))
        return min(self.value, high - 1)


@pytest.fixture
def always_zero_rng():
    return FixedIntegers(0)


@pytest.fixture
def seeded_rng():
    import numpy as np
    return np.random.default_rng(42)
