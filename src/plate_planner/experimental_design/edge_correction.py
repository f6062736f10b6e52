"""
Edge-effect correction.

Perimeter wells suffer evaporation and thermal gradients. Controls and
blanks absorb those artifacts better than experimental samples, so each
experimental entry sitting on an edge well trades wells with the first
control or blank (in layout order) that sits on an interior well.

Only ``well`` values move; every other field stays with its entry.
Experimental entries only ever move inward and controls/blanks only move
outward, so one pass consumes every eligible pair and re-running the
correction on its own output changes nothing.
"""

import logging
from typing import Optional

from plate_planner.experimental_design.plate_allocator import Layout, WellType
from plate_planner.plate_formats import PlateFormat

logger = logging.getLogger(__name__)


def correct_edge_effects(layout: Layout, plate_format: Optional[PlateFormat] = None) -> Layout:
    """
    Move experimental entries off edge wells, in place.

    Args:
        layout: Allocated layout (mutated)
        plate_format: Geometry used for the edge test (default: layout's own)

    Returns:
        The same layout object
    """
    plate_format = plate_format or layout.plate_format
    edge = plate_format.edge_wells()

    # Interior controls/blanks, consumed front to back
    candidates = [
        entry for entry in layout
        if entry.type is not WellType.EXPERIMENTAL and entry.well not in edge
    ]
    cursor = 0
    swaps = 0
    stranded = 0

    for entry in layout:
        if entry.type is not WellType.EXPERIMENTAL or entry.well not in edge:
            continue
        if cursor >= len(candidates):
            stranded += 1
            continue
        partner = candidates[cursor]
        cursor += 1
        logger.debug(f"Edge swap: {entry.group} {entry.well} <-> {partner.group} {partner.well}")
        entry.well, partner.well = partner.well, entry.well
        swaps += 1

    if stranded:
        logger.info(f"Edge correction: {swaps} swaps, {stranded} experimental wells left on edge")
    else:
        logger.debug(f"Edge correction: {swaps} swaps")
    return layout
