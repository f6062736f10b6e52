"""
Scientific number parsing and display formatting.

Accepted shapes (after normalization):
  plain decimal       1500, -0.25, .5
  exponential         3e6, 1.5E-3
  power of ten        3×10^6, 3*10**6, 10^-3, 2.5 x 10^(4)

Normalization strips all whitespace and maps ``×``/``x``/``X`` to ``*`` and
``**`` to ``^``. The normalized text must then match one fixed grammar;
nothing is ever evaluated as an expression.
"""

import logging
import math
import re
from typing import Union

from plate_planner.errors import InvalidInputError

logger = logging.getLogger(__name__)

_MANTISSA = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
_EXPONENT = r"[+-]?\d+"

_NUMBER_RE = re.compile(
    rf"^(?P<mantissa>{_MANTISSA})"
    rf"(?:[eE](?P<exp>{_EXPONENT})"
    rf"|\*10\^(?P<pow>{_EXPONENT}|\({_EXPONENT}\)))?$"
)
_BARE_POWER_RE = re.compile(rf"^(?P<sign>[+-]?)10\^(?P<pow>{_EXPONENT}|\({_EXPONENT}\))$")

Number = Union[int, float, str]


def _normalize(text: str) -> str:
    cleaned = re.sub(r"\s+", "", text)
    cleaned = cleaned.replace("×", "*").replace("x", "*").replace("X", "*")
    cleaned = cleaned.replace("**", "^")
    return cleaned


def parse_scientific(text: Number) -> float:
    """
    Parse a user-typed number.

    Args:
        text: String in plain, exponential or power-of-ten notation.
            Real numbers are accepted as-is (bool is rejected).

    Returns:
        Finite float value

    Raises:
        InvalidInputError: Empty, malformed, or non-finite input
    """
    if isinstance(text, bool):
        raise InvalidInputError(f"Not a number: {text!r}")
    if isinstance(text, (int, float)):
        try:
            value = float(text)
        except OverflowError:
            raise InvalidInputError(f"Value out of range: {text!r}") from None
        if not math.isfinite(value):
            raise InvalidInputError(f"Value must be finite, got {text!r}")
        return value
    if not isinstance(text, str) or not text.strip():
        raise InvalidInputError("Empty numeric input")

    cleaned = _normalize(text)

    match = _NUMBER_RE.match(cleaned)
    if match:
        mantissa = match.group("mantissa")
        exponent = match.group("exp") or match.group("pow")
    else:
        match = _BARE_POWER_RE.match(cleaned)
        if not match:
            raise InvalidInputError(f"Not a number: {text!r}")
        mantissa = match.group("sign") + "1"
        exponent = match.group("pow")

    literal = mantissa
    if exponent is not None:
        literal = f"{mantissa}e{exponent.strip('()')}"

    try:
        value = float(literal)
    except ValueError:
        raise InvalidInputError(f"Not a number: {text!r}") from None

    if not math.isfinite(value):
        raise InvalidInputError(f"Value out of range: {text!r}")
    return value


def parse_positive(text: Number, field: str = "value") -> float:
    """Parse and require a strictly positive result."""
    try:
        value = parse_scientific(text)
    except InvalidInputError as e:
        raise InvalidInputError(f"{field}: {e}") from e
    if value <= 0:
        raise InvalidInputError(f"{field} must be positive, got {value:g}")
    return value


def format_scientific(number: float) -> str:
    """
    Human-readable rendering for results.

    >>> format_scientific(2.5e7)
    '2.50e+07'
    >>> format_scientific(12500)
    '12,500'
    >>> format_scientific(0.5)
    '0.5000'
    """
    if number is None or math.isnan(number):
        return "Invalid"
    magnitude = abs(number)
    if magnitude >= 1e6 or (0 < magnitude < 1e-3):
        return f"{number:.2e}"
    if magnitude >= 1000:
        return f"{number:,.3f}".rstrip("0").rstrip(".")
    return f"{number:#.4g}"
