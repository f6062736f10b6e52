# -*- coding: utf-8 -*-
"""Plate format catalog.

Physical geometry and volumes of the six supported multi-well plates.
The catalog is built once at import time and is read-only.
"""

from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple, Union

from plate_planner.errors import InvalidInputError


@dataclass(frozen=True)
class PlateFormat:
    """Geometry and volumes of one multi-well plate.

    Attributes
    ----------
    well_count : int
        Total number of wells
    rows, cols : int
        Grid dimensions, ``rows * cols == well_count``
    row_labels : tuple of str
        Row letters, top to bottom
    surface_area_cm2 : float
        Growth area of a single well
    max_volume_ul, working_volume_ul : float
        Per-well capacity and recommended working volume

    Examples
    --------
    >>> fmt = PLATE_FORMATS[96]
    >>> fmt.well_name(13)
    'B2'
    >>> fmt.is_edge('B2')
    False
    """

    well_count: int
    rows: int
    cols: int
    row_labels: Tuple[str, ...]
    surface_area_cm2: float
    max_volume_ul: float
    working_volume_ul: float

    def __post_init__(self) -> None:
        if self.rows * self.cols != self.well_count:
            raise ValueError(f"{self.rows}x{self.cols} grid does not hold {self.well_count} wells")
        if len(self.row_labels) != self.rows:
            raise ValueError(f"Expected {self.rows} row labels, got {len(self.row_labels)}")

    @property
    def name(self) -> str:
        return f"{self.well_count}-well"

    def well_name(self, index: int) -> str:
        """Row-major index (0 = A1) to well name."""
        if not 0 <= index < self.well_count:
            raise IndexError(f"Well index {index} out of range for {self.name} plate")
        row = self.row_labels[index // self.cols]
        col = (index % self.cols) + 1
        return f"{row}{col}"

    def well_position(self, well: str) -> Tuple[int, int]:
        """Well name to 0-indexed (row, col)."""
        row_label = well.rstrip("0123456789")
        col_text = well[len(row_label):]
        if row_label not in self.row_labels or not col_text:
            raise InvalidInputError(f"Well {well!r} is not on a {self.name} plate")
        col = int(col_text)
        if not 1 <= col <= self.cols:
            raise InvalidInputError(f"Well {well!r} is not on a {self.name} plate")
        return self.row_labels.index(row_label), col - 1

    def well_index(self, well: str) -> int:
        row_idx, col_idx = self.well_position(well)
        return row_idx * self.cols + col_idx

    def is_edge(self, well: str) -> bool:
        """True for wells in the outermost row or column."""
        row_idx, col_idx = self.well_position(well)
        return (
            row_idx == 0 or
            row_idx == self.rows - 1 or
            col_idx == 0 or
            col_idx == self.cols - 1
        )

    def edge_wells(self) -> FrozenSet[str]:
        return frozenset(
            self.well_name(i) for i in range(self.well_count) if self.is_edge(self.well_name(i))
        )


def _row_labels(n: int) -> Tuple[str, ...]:
    return tuple(chr(ord('A') + i) for i in range(n))


PLATE_FORMATS: Mapping[int, PlateFormat] = MappingProxyType({
    6: PlateFormat(6, 2, 3, _row_labels(2), 9.6, 3500.0, 2500.0),
    12: PlateFormat(12, 3, 4, _row_labels(3), 3.8, 2200.0, 1500.0),
    24: PlateFormat(24, 4, 6, _row_labels(4), 1.9, 1000.0, 750.0),
    48: PlateFormat(48, 6, 8, _row_labels(6), 0.75, 500.0, 350.0),
    96: PlateFormat(96, 8, 12, _row_labels(8), 0.32, 360.0, 200.0),
    384: PlateFormat(384, 16, 24, _row_labels(16), 0.087, 80.0, 50.0),
})


def get_plate_format(plate: Union[int, str, PlateFormat]) -> PlateFormat:
    """Resolve 96, "96" or "96-well" to its PlateFormat."""
    if isinstance(plate, PlateFormat):
        return plate
    key = plate
    if isinstance(key, str):
        key = key.strip().lower()
        if key.endswith("-well"):
            key = key[:-len("-well")]
        if not key.isdigit():
            raise InvalidInputError(f"Unsupported plate format: {plate!r}")
        key = int(key)
    try:
        return PLATE_FORMATS[key]
    except KeyError:
        raise InvalidInputError(
            f"Unsupported plate format: {plate!r} (choose from {sorted(PLATE_FORMATS)})"
        ) from None
