"""Plate layout allocation and layout transforms."""

from plate_planner.experimental_design.plate_allocator import (
    BLANK,
    GROUP_PALETTE,
    NEGATIVE_CONTROL,
    POSITIVE_CONTROL,
    Layout,
    LayoutAllocator,
    LayoutEntry,
    WellType,
    allocate,
    required_well_count,
)
from plate_planner.experimental_design.edge_correction import correct_edge_effects
from plate_planner.experimental_design.randomization import make_rng, shuffle_layout
from plate_planner.experimental_design.summary import (
    LAYOUT_COLUMNS,
    PlateUsage,
    layout_records,
    layout_to_frame,
    plate_usage,
)

__all__ = [
    "BLANK",
    "GROUP_PALETTE",
    "NEGATIVE_CONTROL",
    "POSITIVE_CONTROL",
    "Layout",
    "LayoutAllocator",
    "LayoutEntry",
    "WellType",
    "allocate",
    "required_well_count",
    "correct_edge_effects",
    "make_rng",
    "shuffle_layout",
    "LAYOUT_COLUMNS",
    "PlateUsage",
    "layout_records",
    "layout_to_frame",
    "plate_usage",
]
