"""
Error taxonomy for plate design and lab calculations.

Every failure is local and typed so callers can branch on the class
instead of parsing messages.
"""

from __future__ import annotations
from dataclasses import dataclass


class PlatePlannerError(ValueError):
    """Base class for all plate_planner failures."""
    pass


class InvalidInputError(PlatePlannerError):
    """Raised for unparseable, non-finite, non-positive or malformed input."""
    pass


class UnknownUnitError(InvalidInputError):
    """Raised when a unit string is not in any conversion table."""

    def __init__(self, unit: str):
        self.unit = unit
        super().__init__(f"Unknown unit: {unit!r}")


class VolumeExceededError(InvalidInputError):
    """Raised when summed stock volumes do not fit in the requested total."""
    pass


class ConcentrationOrderingError(PlatePlannerError):
    """Raised when a stock concentration is not higher than its target."""

    def __init__(self, stock: float, target: float, label: str = "Stock"):
        self.stock = stock
        self.target = target
        super().__init__(
            f"{label} concentration ({stock:g}) must be higher than target ({target:g})"
        )


class IncompatibleUnitsError(PlatePlannerError):
    """Raised when converting between units of different families."""

    def __init__(self, from_unit: str, to_unit: str):
        self.from_unit = from_unit
        self.to_unit = to_unit
        super().__init__(f"Cannot convert {from_unit!r} to {to_unit!r}: different unit families")


@dataclass(eq=False)
class CapacityExceededError(PlatePlannerError):
    required: int
    available: int

    def __post_init__(self) -> None:
        super().__init__(
            f"Design requires {self.required} wells but only {self.available} available"
        )
