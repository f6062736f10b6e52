"""
Deterministic Plate Layout Allocator

Maps treatment groups x timepoints x biological replicates x technical
replicates onto physical wells of a plate, filling wells row-major
(A1, A2, ... then B1, ...).

Allocation order:
1. Experimental block: group -> timepoint -> bio replicate -> tech replicate
2. Control block (optional): timepoint -> bio -> tech, positive then negative
3. Blank block (optional): timepoint -> tech, bio replicate fixed to 1

Capacity is checked before any well is assigned, so a design that does not
fit raises CapacityExceededError and produces no layout.
"""

import logging
import numbers
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Sequence, Union

from plate_planner.errors import CapacityExceededError, InvalidInputError
from plate_planner.plate_formats import PlateFormat, get_plate_format

logger = logging.getLogger(__name__)

POSITIVE_CONTROL = "Positive Control"
NEGATIVE_CONTROL = "Negative Control"
BLANK = "Blank"

GROUP_PALETTE = (
    '#2563eb', '#dc2626', '#16a34a', '#ca8a04',
    '#9333ea', '#ef4444', '#0891b2', '#be185d',
    '#f59e0b', '#6366f1', '#ec4899', '#14b8a6',
)


class WellType(str, Enum):
    EXPERIMENTAL = "experimental"
    CONTROL = "control"
    BLANK = "blank"


@dataclass
class LayoutEntry:
    """One occupied well. Only ``well`` is rewritten by layout transforms."""
    well: str
    group: str
    timepoint: str
    bio_replicate: int
    tech_replicate: int
    type: WellType
    color: str

    @property
    def sample_key(self) -> tuple:
        """(group, timepoint, bio_replicate, tech_replicate)"""
        return (self.group, self.timepoint, self.bio_replicate, self.tech_replicate)


@dataclass
class Layout:
    """Entries in allocation order (not sorted by well)."""
    plate_format: PlateFormat
    entries: List[LayoutEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[LayoutEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> LayoutEntry:
        return self.entries[index]

    @property
    def wells(self) -> List[str]:
        return [entry.well for entry in self.entries]

    def group_colors(self) -> Dict[str, str]:
        """Legend: group label -> color, in first-occurrence order."""
        colors = {}
        for entry in self.entries:
            colors.setdefault(entry.group, entry.color)
        return colors


def required_well_count(
    n_groups: int,
    n_timepoints: int,
    bio_replicates: int,
    tech_replicates: int,
    include_controls: bool = False,
    include_blanks: bool = False,
) -> int:
    """Wells needed for a design; matches the allocator's capacity check."""
    per_timepoint = bio_replicates * tech_replicates
    required = n_groups * n_timepoints * per_timepoint
    if include_controls:
        required += 2 * n_timepoints * per_timepoint
    if include_blanks:
        required += n_timepoints * tech_replicates
    return required


class LayoutAllocator:
    """
    Row-major layout allocator for a single plate.

    Deterministic: the same inputs always produce the same layout.
    Use the randomization module afterwards to decorrelate position and
    treatment.
    """

    def __init__(self, plate_format: Union[int, str, PlateFormat] = 96):
        """
        Args:
            plate_format: Well count (6, 12, 24, 48, 96, 384) or a PlateFormat
        """
        self.plate_format = get_plate_format(plate_format)

    @property
    def available_wells(self) -> int:
        return self.plate_format.rows * self.plate_format.cols

    def allocate(
        self,
        groups: Sequence[str],
        timepoints: Sequence[str],
        bio_replicates: int,
        tech_replicates: int,
        include_controls: bool = False,
        include_blanks: bool = False,
    ) -> Layout:
        """
        Assign every design entry to a well.

        Args:
            groups: Treatment group labels, in allocation order
            timepoints: Timepoint labels, in allocation order
            bio_replicates: Biological replicates per group x timepoint (>= 1)
            tech_replicates: Technical replicates per bio replicate (>= 1)
            include_controls: Add a positive and a negative control well per
                timepoint x bio x tech combination
            include_blanks: Add one blank per timepoint x tech replicate

        Returns:
            Layout in allocation order

        Raises:
            InvalidInputError: Empty or duplicate labels, replicates < 1
            CapacityExceededError: Design needs more wells than the plate has
        """
        groups = _validate_labels(groups, "groups")
        timepoints = _validate_labels(timepoints, "timepoints")
        bio_replicates = _validate_replicates(bio_replicates, "bio_replicates")
        tech_replicates = _validate_replicates(tech_replicates, "tech_replicates")

        required = required_well_count(
            len(groups), len(timepoints), bio_replicates, tech_replicates,
            include_controls, include_blanks,
        )
        available = self.available_wells
        if required > available:
            logger.warning(
                f"Design needs {required} wells, {self.plate_format.name} plate has {available}"
            )
            raise CapacityExceededError(required=required, available=available)

        logger.info(f"Allocating {required}/{available} wells on {self.plate_format.name} plate")

        builder = _LayoutBuilder(self.plate_format)

        for group in groups:
            for timepoint in timepoints:
                for b in range(1, bio_replicates + 1):
                    for t in range(1, tech_replicates + 1):
                        builder.add(group, timepoint, b, t, WellType.EXPERIMENTAL)

        if include_controls:
            for timepoint in timepoints:
                for b in range(1, bio_replicates + 1):
                    for t in range(1, tech_replicates + 1):
                        builder.add(POSITIVE_CONTROL, timepoint, b, t, WellType.CONTROL)
                        builder.add(NEGATIVE_CONTROL, timepoint, b, t, WellType.CONTROL)

        if include_blanks:
            for timepoint in timepoints:
                for t in range(1, tech_replicates + 1):
                    builder.add(BLANK, timepoint, 1, t, WellType.BLANK)

        return builder.layout


class _LayoutBuilder:
    """Hands out wells in row-major order and colors groups on first sight."""

    def __init__(self, plate_format: PlateFormat):
        self.layout = Layout(plate_format=plate_format)
        self._next_index = 0
        self._colors: Dict[str, str] = {}

    def _color_for(self, group: str) -> str:
        if group not in self._colors:
            self._colors[group] = GROUP_PALETTE[len(self._colors) % len(GROUP_PALETTE)]
        return self._colors[group]

    def add(self, group: str, timepoint: str, bio: int, tech: int, well_type: WellType) -> None:
        well = self.layout.plate_format.well_name(self._next_index)
        self._next_index += 1
        self.layout.entries.append(LayoutEntry(
            well=well,
            group=group,
            timepoint=timepoint,
            bio_replicate=bio,
            tech_replicate=tech,
            type=well_type,
            color=self._color_for(group),
        ))


def _validate_labels(labels: Sequence[str], name: str) -> List[str]:
    if isinstance(labels, str):
        raise InvalidInputError(f"{name} must be a sequence of labels, not a string")
    cleaned = [str(label).strip() for label in labels]
    if not cleaned:
        raise InvalidInputError(f"At least one entry required in {name}")
    if any(not label for label in cleaned):
        raise InvalidInputError(f"Blank label in {name}")
    seen = set()
    for label in cleaned:
        if label in seen:
            raise InvalidInputError(f"Duplicate label {label!r} in {name}")
        seen.add(label)
    return cleaned


def _validate_replicates(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidInputError(f"{name} must be an integer >= 1, got {value!r}")
    return int(value)


def allocate(
    groups: Sequence[str],
    timepoints: Sequence[str],
    bio_replicates: int,
    tech_replicates: int,
    plate_format: Union[int, str, PlateFormat] = 96,
    include_controls: bool = False,
    include_blanks: bool = False,
) -> Layout:
    """Functional form of :meth:`LayoutAllocator.allocate`."""
    return LayoutAllocator(plate_format).allocate(
        groups, timepoints, bio_replicates, tech_replicates,
        include_controls=include_controls, include_blanks=include_blanks,
    )
