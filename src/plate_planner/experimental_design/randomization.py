"""
Layout randomization (Fisher-Yates over well labels).

The random source is injectable: pass a ``numpy.random.Generator``, an
integer seed, or nothing to fall back to the configured default seed.
"""

import logging
from typing import Optional, Union

import numpy as np

from plate_planner.config.settings import settings
from plate_planner.experimental_design.plate_allocator import Layout

logger = logging.getLogger(__name__)

RandomSource = Union[None, int, np.random.Generator]


def make_rng(rng: RandomSource = None) -> np.random.Generator:
    """Generator from an existing generator, a seed, or the settings seed."""
    if rng is None:
        return np.random.default_rng(settings.random_seed)
    if isinstance(rng, (int, np.integer)):
        return np.random.default_rng(int(rng))
    return rng


def shuffle_layout(layout: Layout, rng: RandomSource = None) -> Layout:
    """
    Permute which well each entry occupies, in place.

    Entries keep their list order and all non-well fields; only the pairing
    of entry and well label changes.

    Args:
        layout: Allocated layout (mutated)
        rng: Anything with an ``integers(low, high)`` method, or a seed

    Returns:
        The same layout object
    """
    rng = make_rng(rng)
    wells = layout.wells

    for i in range(len(wells) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        wells[i], wells[j] = wells[j], wells[i]

    for entry, well in zip(layout, wells):
        entry.well = well

    logger.debug(f"Shuffled {len(wells)} wells")
    return layout
