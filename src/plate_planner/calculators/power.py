"""
Sample size for a two-group comparison.

    n_per_group = ceil(2 * (z_alpha + z_beta)^2 / d^2)

with z_alpha = Φ⁻¹(1 - alpha/2), z_beta = Φ⁻¹(power) from the normal
quantile function, so any alpha/power in (0, 1) is supported.
"""

import logging
import numbers
from dataclasses import dataclass

import numpy as np
from scipy import stats

from plate_planner.errors import InvalidInputError
from plate_planner.parsing import Number, parse_positive

logger = logging.getLogger(__name__)


@dataclass
class PowerAnalysisResult:
    """Result of statistical power analysis."""
    per_group_sample_size: int
    total_sample_size: int
    z_alpha: float
    z_beta: float
    effect_size: float
    alpha: float
    power: float
    group_count: int


def _probability(value: Number, name: str) -> float:
    p = parse_positive(value, name)
    if p >= 1:
        raise InvalidInputError(f"{name} must be between 0 and 1, got {p:g}")
    return p


def statistical_power(
    effect_size: Number,
    alpha: Number = 0.05,
    power: Number = 0.80,
    group_count: int = 2,
) -> PowerAnalysisResult:
    """
    Calculate required sample size for desired statistical power.

    Args:
        effect_size: Expected effect size (Cohen's d), > 0
        alpha: Two-sided significance level, in (0, 1)
        power: Desired statistical power, in (0, 1)
        group_count: Number of groups in the experiment (>= 1)

    Returns:
        PowerAnalysisResult with per-group and total sample sizes
    """
    d = parse_positive(effect_size, "effect size")
    alpha = _probability(alpha, "alpha")
    power = _probability(power, "power")
    if isinstance(group_count, bool) or not isinstance(group_count, numbers.Integral) or group_count < 1:
        raise InvalidInputError(f"group_count must be an integer >= 1, got {group_count!r}")

    z_alpha = float(stats.norm.ppf(1 - alpha / 2))
    z_beta = float(stats.norm.ppf(power))

    n_per_group = int(np.ceil(2 * (z_alpha + z_beta) ** 2 / d ** 2))
    total = n_per_group * int(group_count)

    if n_per_group < 3:
        logger.info(f"Very small sample size ({n_per_group} per group) - consider larger effect or lower power")
    elif n_per_group > 100:
        logger.info(f"Large sample size required ({n_per_group} per group)")

    return PowerAnalysisResult(
        per_group_sample_size=n_per_group,
        total_sample_size=total,
        z_alpha=z_alpha,
        z_beta=z_beta,
        effect_size=d,
        alpha=alpha,
        power=power,
        group_count=int(group_count),
    )
