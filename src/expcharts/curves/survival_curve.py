"""
Survival curve approximation from two median time-to-event values.

Each group is modelled as an exponential time-to-event distribution fixed by
its median: lambda = ln(2) / median, S(t) = 100 * exp(-lambda * t).

This is an illustrative curve, not the Kaplan-Meier estimate. The statistics
service computes the real step function; only the medians reach the client.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from expcharts.curves.types import CurvePoint
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)

# Number of time samples (t = 0 and t = t_max both included).
NUM_POINTS = 51

# t_max = DOMAIN_MEDIANS * max(control_median, treatment_median).
DOMAIN_MEDIANS = 2.0

CONTROL = "control"
TREATMENT = "treatment"


def _valid_median(median: Optional[float]) -> bool:
    if median is None:
        return False
    try:
        m = float(median)
    except (TypeError, ValueError):
        return False
    return math.isfinite(m) and m > 0


def hazard_rate(median: float) -> float:
    """Exponential rate whose median survival time is `median`."""
    return math.log(2.0) / median


def survival_at(t, median: float):
    """Survival percentage at time t (scalar or array), clamped at 0."""
    s = 100.0 * np.exp(-hazard_rate(median) * np.asarray(t, dtype=float))
    s = np.maximum(0.0, s)
    if np.ndim(s) == 0:
        return float(s)
    return s


def approximate_survival(
    control_median: Optional[float],
    treatment_median: Optional[float],
) -> Optional[tuple[CurvePoint, ...]]:
    """
    Approximate control and treatment survival curves.

    Args:
        control_median: Median time-to-event in the control group.
        treatment_median: Median time-to-event in the treatment group.

    Returns:
        NUM_POINTS CurvePoints over t in [0, 2 * max(median)], each with
        "control" and "treatment" survival percentages, or None unless both
        medians are present and positive.
    """
    if not (_valid_median(control_median) and _valid_median(treatment_median)):
        logger.debug(
            "no survival curve: medians control=%r treatment=%r",
            control_median,
            treatment_median,
        )
        return None

    control_median = float(control_median)
    treatment_median = float(treatment_median)
    t_max = DOMAIN_MEDIANS * max(control_median, treatment_median)

    ts = np.linspace(0.0, t_max, NUM_POINTS)
    s_control = survival_at(ts, control_median)
    s_treatment = survival_at(ts, treatment_median)

    return tuple(
        CurvePoint(x=float(t), series={CONTROL: float(c), TREATMENT: float(tr)})
        for t, c, tr in zip(ts, s_control, s_treatment)
    )
