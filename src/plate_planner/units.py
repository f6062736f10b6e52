"""
Unit conversion within physical unit families.

Each family has a canonical unit and a table of scale factors to it:

    molar       µM
    mass        µg/mL
    biological  CFU/mL
    volume      µL

Conversion between families is rejected, and unit strings that appear in no
table raise UnknownUnitError rather than passing the value through.
"""

import logging
import re
from enum import Enum
from typing import Dict, Tuple

from plate_planner.errors import IncompatibleUnitsError, UnknownUnitError

logger = logging.getLogger(__name__)

MICRO = "µ"


class UnitFamily(str, Enum):
    MOLAR = "molar"
    MASS = "mass"
    BIOLOGICAL = "biological"
    VOLUME = "volume"


CANONICAL_UNITS: Dict[UnitFamily, str] = {
    UnitFamily.MOLAR: f"{MICRO}M",
    UnitFamily.MASS: f"{MICRO}g/mL",
    UnitFamily.BIOLOGICAL: "CFU/mL",
    UnitFamily.VOLUME: f"{MICRO}L",
}

# Scale factor: value_in_unit * factor = value_in_canonical_unit
UNIT_SCALES: Dict[UnitFamily, Dict[str, float]] = {
    UnitFamily.MOLAR: {
        "M": 1e6,
        "mM": 1e3,
        f"{MICRO}M": 1.0,
        "nM": 1e-3,
        "pM": 1e-6,
    },
    UnitFamily.MASS: {
        "g/L": 1e3,
        "mg/mL": 1e3,
        "mg/L": 1.0,
        f"{MICRO}g/mL": 1.0,
        "ng/mL": 1e-3,
        "pg/mL": 1e-6,
    },
    UnitFamily.BIOLOGICAL: {
        "CFU/mL": 1.0,
        f"CFU/{MICRO}L": 1e3,
        "CFU/L": 1e-3,
        "cells/mL": 1.0,
        f"cells/{MICRO}L": 1e3,
    },
    UnitFamily.VOLUME: {
        "L": 1e6,
        "mL": 1e3,
        f"{MICRO}L": 1.0,
        "nL": 1e-3,
    },
}

_UNIT_INDEX: Dict[str, Tuple[UnitFamily, float]] = {
    unit: (family, scale)
    for family, table in UNIT_SCALES.items()
    for unit, scale in table.items()
}

# "u" used as micro prefix: start of string or after "/", followed by a letter
_ASCII_MICRO_RE = re.compile(r"(^|/)u(?=[A-Za-z])")


def normalize_unit(unit: str) -> str:
    """Canonical spelling: trims whitespace, maps ASCII ``u`` and Greek mu to µ."""
    if not isinstance(unit, str):
        raise UnknownUnitError(str(unit))
    text = unit.strip().replace("μ", MICRO)
    return _ASCII_MICRO_RE.sub(rf"\g<1>{MICRO}", text)


def _lookup(unit: str) -> Tuple[UnitFamily, float]:
    key = normalize_unit(unit)
    try:
        return _UNIT_INDEX[key]
    except KeyError:
        logger.warning(f"Unknown unit {unit!r}")
        raise UnknownUnitError(unit) from None


def unit_family(unit: str) -> UnitFamily:
    return _lookup(unit)[0]


def is_known_unit(unit: str) -> bool:
    try:
        _lookup(unit)
    except UnknownUnitError:
        return False
    return True


def to_canonical(value: float, unit: str) -> float:
    """Express ``value`` (in ``unit``) in its family's canonical unit."""
    _, scale = _lookup(unit)
    return value * scale


def from_canonical(value: float, unit: str) -> float:
    """Inverse of :func:`to_canonical`."""
    _, scale = _lookup(unit)
    return value / scale


def convert(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert between two units of the same family.

    Raises:
        UnknownUnitError: Either unit is not recognized
        IncompatibleUnitsError: Units belong to different families
    """
    from_family, from_scale = _lookup(from_unit)
    to_family, to_scale = _lookup(to_unit)
    if from_family is not to_family:
        logger.warning(
            f"Rejected conversion {from_unit!r} ({from_family.value}) -> "
            f"{to_unit!r} ({to_family.value})"
        )
        raise IncompatibleUnitsError(from_unit, to_unit)
    return value * from_scale / to_scale
