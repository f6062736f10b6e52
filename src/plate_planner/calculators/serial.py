"""
Serial dilution series and plate-count back-calculation.
"""

import math
import numbers
from typing import Iterator, List, NamedTuple

from plate_planner.errors import InvalidInputError
from plate_planner.parsing import Number, parse_positive, parse_scientific


class SerialDilutionStep(NamedTuple):
    step: int
    dilution_label: str
    concentration: float


def _cumulative_factor(factor: float, step: int) -> float:
    """``factor ** step`` as a float; raises InvalidInputError past float range."""
    try:
        cumulative = factor ** step
    except OverflowError:
        cumulative = math.inf
    if not math.isfinite(cumulative):
        raise InvalidInputError(
            f"Cumulative dilution {factor:g}^{step} is too large to represent"
        )
    return cumulative


def _label(factor: float, step: int, cumulative: float) -> str:
    if step == 0:
        return "Stock"
    if factor.is_integer():
        return f"1:{int(factor) ** step}"
    return f"1:{cumulative:g}"


def iter_serial_dilution(initial_concentration: Number, factor: Number, steps: int) -> Iterator[SerialDilutionStep]:
    """
    Yield steps 0..steps of a serial dilution.

    Step ``i`` holds ``initial / factor**i``; step 0 is the undiluted stock.
    """
    initial = parse_positive(initial_concentration, "initial concentration")
    factor = parse_positive(factor, "dilution factor")
    if factor <= 1:
        raise InvalidInputError(f"Dilution factor must be greater than 1, got {factor:g}")
    if isinstance(steps, bool) or not isinstance(steps, numbers.Integral) or steps < 0:
        raise InvalidInputError(f"steps must be a non-negative integer, got {steps!r}")
    steps = int(steps)

    # Concentration falls monotonically, so the last step bounds the series
    if initial / _cumulative_factor(factor, steps) == 0:
        raise InvalidInputError(
            f"{steps} steps of {factor:g}x dilution underflow {initial:g} to zero"
        )

    def _steps():
        for i in range(steps + 1):
            cumulative = _cumulative_factor(factor, i)
            yield SerialDilutionStep(
                step=i,
                dilution_label=_label(factor, i, cumulative),
                concentration=initial / cumulative,
            )

    return _steps()


def serial_dilution_series(initial_concentration: Number, factor: Number, steps: int) -> List[SerialDilutionStep]:
    """
    Full series as a list of ``steps + 1`` entries.

    >>> [s.dilution_label for s in serial_dilution_series(1e9, 10, 2)]
    ['Stock', '1:10', '1:100']
    """
    return list(iter_serial_dilution(initial_concentration, factor, steps))


def colonies_to_concentration(colony_count: Number, volume_plated_ml: Number, dilution_factor: Number) -> float:
    """CFU/mL of the original sample from a plate count."""
    colonies = parse_scientific(colony_count)
    if colonies < 0 or not float(colonies).is_integer():
        raise InvalidInputError(f"Colony count must be a non-negative integer, got {colony_count!r}")
    volume = parse_positive(volume_plated_ml, "volume plated")
    factor = parse_positive(dilution_factor, "dilution factor")
    return colonies * factor / volume
