"""
Plate usage statistics and tabular layout records.

Records use the export column names (Well, Group, Timepoint, BioReplicate,
TechReplicate, Type, Color) and keep layout order, so a CSV writer can
consume them directly.
"""

from dataclasses import dataclass
from typing import Dict, List, Sequence, Union

import pandas as pd

from plate_planner.experimental_design.plate_allocator import Layout, required_well_count
from plate_planner.plate_formats import PlateFormat, get_plate_format

LAYOUT_COLUMNS = [
    "Well", "Group", "Timepoint", "BioReplicate", "TechReplicate", "Type", "Color",
]


@dataclass
class PlateUsage:
    """Capacity summary for a proposed design."""
    wells_needed: int
    wells_available: int
    utilization_pct: float
    total_surface_area_cm2: float

    @property
    def fits(self) -> bool:
        return self.wells_needed <= self.wells_available


def plate_usage(
    groups: Sequence[str],
    timepoints: Sequence[str],
    bio_replicates: int,
    tech_replicates: int,
    plate_format: Union[int, str, PlateFormat] = 96,
    include_controls: bool = False,
    include_blanks: bool = False,
) -> PlateUsage:
    """Live stats for a design, computed without allocating it."""
    fmt = get_plate_format(plate_format)
    needed = required_well_count(
        len(groups), len(timepoints), bio_replicates, tech_replicates,
        include_controls, include_blanks,
    )
    available = fmt.rows * fmt.cols
    return PlateUsage(
        wells_needed=needed,
        wells_available=available,
        utilization_pct=round(needed / available * 100, 1),
        total_surface_area_cm2=round(needed * fmt.surface_area_cm2, 2),
    )


def layout_records(layout: Layout) -> List[Dict]:
    return [
        {
            "Well": entry.well,
            "Group": entry.group,
            "Timepoint": entry.timepoint,
            "BioReplicate": entry.bio_replicate,
            "TechReplicate": entry.tech_replicate,
            "Type": entry.type.value,
            "Color": entry.color,
        }
        for entry in layout
    ]


def layout_to_frame(layout: Layout) -> pd.DataFrame:
    """One row per entry, in layout order."""
    return pd.DataFrame(layout_records(layout), columns=LAYOUT_COLUMNS)
