"""plate_planner - multi-well plate experiment design and lab calculators."""

__version__ = "0.1.0"

from plate_planner.errors import (
    CapacityExceededError,
    ConcentrationOrderingError,
    IncompatibleUnitsError,
    InvalidInputError,
    PlatePlannerError,
    UnknownUnitError,
    VolumeExceededError,
)
from plate_planner.plate_formats import PLATE_FORMATS, PlateFormat, get_plate_format
from plate_planner.parsing import format_scientific, parse_scientific
from plate_planner.units import UnitFamily, convert, from_canonical, to_canonical
from plate_planner.experimental_design import (
    Layout,
    LayoutAllocator,
    LayoutEntry,
    WellType,
    allocate,
    correct_edge_effects,
    shuffle_layout,
)
from plate_planner.calculators import (
    cfu_distribution,
    colonies_to_concentration,
    dilution,
    multi_strain_mix,
    serial_dilution_series,
    statistical_power,
)

__all__ = [
    "CapacityExceededError",
    "ConcentrationOrderingError",
    "IncompatibleUnitsError",
    "InvalidInputError",
    "PlatePlannerError",
    "UnknownUnitError",
    "VolumeExceededError",
    "PLATE_FORMATS",
    "PlateFormat",
    "get_plate_format",
    "format_scientific",
    "parse_scientific",
    "UnitFamily",
    "convert",
    "from_canonical",
    "to_canonical",
    "Layout",
    "LayoutAllocator",
    "LayoutEntry",
    "WellType",
    "allocate",
    "correct_edge_effects",
    "shuffle_layout",
    "cfu_distribution",
    "colonies_to_concentration",
    "dilution",
    "multi_strain_mix",
    "serial_dilution_series",
    "statistical_power",
]
