"""
Illustrative statistical power vs. sample size curve.

A fixed sigmoid shape is stretched around the required sample size computed
by the statistics service:

    power(n) = min(99, 50 + 50 * tanh((n - 0.5 * N) / (0.3 * N)))

where N is the required sample size. The true power function depends on
effect size and variance, which are not available here. The formula is kept
as-is so the displayed curve does not change meaning.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from expcharts.curves.types import CurvePoint
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)

POWER_CAP = 99.0
START_FRACTION = 0.2
END_FRACTION = 2.0
TARGET_STEPS = 50

POWER = "power"


def power_at(n: float, required_n: float) -> float:
    """Illustrative power (percent) at sample size n."""
    return min(POWER_CAP, 50.0 + 50.0 * math.tanh((n - 0.5 * required_n) / (0.3 * required_n)))


def sample_sizes(required_n: float) -> range:
    """Sample sizes the curve is evaluated at.

    Starts at floor(0.2 * N), stops at 2 * N, step max(1, floor(2 * N / 50)).
    """
    max_n = END_FRACTION * required_n
    step = max(1, int(math.floor(max_n / TARGET_STEPS)))
    start = int(math.floor(START_FRACTION * required_n))
    return range(start, int(math.floor(max_n)) + 1, step)


def approximate_power_curve(
    required_n: Optional[float],
    target_power: Optional[float] = None,
) -> Optional[tuple[CurvePoint, ...]]:
    """
    Build the power curve around a required sample size.

    Args:
        required_n: Required sample size per group (from the statistics service).
        target_power: Target power in percent. Not used by the curve shape;
            rendering draws it as a reference line.

    Returns:
        CurvePoints with x = n and series {"power": percent}, or None when
        required_n is missing or not positive.
    """
    if required_n is None or not math.isfinite(float(required_n)) or float(required_n) <= 0:
        logger.debug("no power curve: required_n=%r", required_n)
        return None

    required_n = float(required_n)
    return tuple(
        CurvePoint(x=float(n), series={POWER: power_at(n, required_n)})
        for n in sample_sizes(required_n)
    )


def first_n_reaching(points: Iterable[CurvePoint], power: float) -> Optional[float]:
    """Smallest sampled n whose power is at least `power`, or None."""
    for p in points:
        if p.value(POWER) >= power:
            return p.x
    return None
