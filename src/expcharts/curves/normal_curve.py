"""
Normal curve synthesis, pure numpy/pandas.

Builds two overlaid bell curves (control vs. variant) from means, sample sizes
and optional standard deviations. Only summary statistics are used; the curves
show the sampling distribution of each group's mean.

Display scaling (documented):
  True standard errors at realistic sample sizes give curves too narrow to see.
  Each standard error is multiplied by DISPLAY_SCALE and floored at
  DISPLAY_STD_FLOOR before plotting. This is a display distortion, not a
  statistical claim.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import pandas as pd

from expcharts.curves.types import CurvePoint, SummaryStat, is_missing, is_valid_sample_size
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)

# Multiplier applied to each standard error before plotting.
DISPLAY_SCALE = 10.0

# Smallest display std, keeps the density finite at zero variance.
DISPLAY_STD_FLOOR = 0.001

# Half-width of the x domain, in display standard deviations.
DOMAIN_HALF_WIDTH = 4.0

# Number of x samples (101 points, both ends included).
NUM_POINTS = 101

# Std used for a continuous metric when neither group supplies one.
DEFAULT_STD = 1.0

CONTROL = "control"
VARIANT = "variant"


def normal_pdf(
    x: Union[float, np.ndarray],
    mean: float,
    std: float,
) -> Union[float, np.ndarray]:
    """Univariate normal density f(x; mean, std)."""
    coefficient = 1.0 / (std * math.sqrt(2.0 * math.pi))
    z = (np.asarray(x, dtype=float) - mean) / std
    out = coefficient * np.exp(-0.5 * z * z)
    if np.ndim(out) == 0:
        return float(out)
    return out


@dataclass(frozen=True)
class NormalCurves:
    """Two density series sampled on one shared x axis."""

    control_series: tuple[CurvePoint, ...]
    variant_series: tuple[CurvePoint, ...]
    control_mean: float
    variant_mean: float
    control_display_std: float
    variant_display_std: float

    @property
    def x_domain(self) -> tuple[float, float]:
        return self.control_series[0].x, self.control_series[-1].x

    @property
    def x(self) -> list[float]:
        return [p.x for p in self.control_series]

    def to_frame(self) -> pd.DataFrame:
        """Return columns x, control, variant (one row per sample)."""
        return pd.DataFrame(
            {
                "x": self.x,
                CONTROL: [p.value(CONTROL) for p in self.control_series],
                VARIANT: [p.value(VARIANT) for p in self.variant_series],
            }
        )


# -----------------------------------------------------------------------------
# Step 1: standard error per group
# -----------------------------------------------------------------------------


def standard_errors(
    control_mean: float,
    variant_mean: float,
    control_n: float,
    variant_n: float,
    control_std: Optional[float] = None,
    variant_std: Optional[float] = None,
    is_proportion: bool = True,
) -> tuple[float, float]:
    """
    Standard error of each group's mean.

    Proportions: sqrt(p(1-p)/n). Continuous: std/sqrt(n). A variant without a
    std borrows the control std; any group still without one uses DEFAULT_STD.
    """
    if is_proportion:
        se_control = math.sqrt(max(control_mean * (1.0 - control_mean), 0.0) / control_n)
        se_variant = math.sqrt(max(variant_mean * (1.0 - variant_mean), 0.0) / variant_n)
        return se_control, se_variant

    std_c = control_std if not is_missing(control_std) else DEFAULT_STD
    if not is_missing(variant_std):
        std_v = variant_std
    elif not is_missing(control_std):
        std_v = control_std
    else:
        std_v = DEFAULT_STD
    return std_c / math.sqrt(control_n), std_v / math.sqrt(variant_n)


# -----------------------------------------------------------------------------
# Step 2: display width
# -----------------------------------------------------------------------------


def display_std(se: float) -> float:
    """Scale a standard error for display and floor it at DISPLAY_STD_FLOOR."""
    return max(se * DISPLAY_SCALE, DISPLAY_STD_FLOOR)


# -----------------------------------------------------------------------------
# Step 3 + 4: shared domain and sampling
# -----------------------------------------------------------------------------


def shared_domain(
    control_mean: float,
    variant_mean: float,
    control_display_std: float,
    variant_display_std: float,
) -> tuple[float, float]:
    """x range covering ±DOMAIN_HALF_WIDTH display stds around both means."""
    lo = min(
        control_mean - DOMAIN_HALF_WIDTH * control_display_std,
        variant_mean - DOMAIN_HALF_WIDTH * variant_display_std,
    )
    hi = max(
        control_mean + DOMAIN_HALF_WIDTH * control_display_std,
        variant_mean + DOMAIN_HALF_WIDTH * variant_display_std,
    )
    return lo, hi


def synthesize_normal_curves(
    control_mean: Optional[float],
    variant_mean: Optional[float],
    control_n: Optional[float],
    variant_n: Optional[float],
    control_std: Optional[float] = None,
    variant_std: Optional[float] = None,
    is_proportion: bool = True,
) -> Optional[NormalCurves]:
    """
    Synthesize control and variant density curves from summary statistics.

    Args:
        control_mean: Control rate (proportion) or mean.
        variant_mean: Variant rate (proportion) or mean.
        control_n: Control sample size.
        variant_n: Variant sample size.
        control_std: Control std dev (continuous metrics only).
        variant_std: Variant std dev (continuous metrics only).
        is_proportion: True for conversion rates, False for continuous means.

    Returns:
        NormalCurves with NUM_POINTS samples per series, or None when any of
        the means or sample sizes is missing or zero, or when a sample size
        is not a finite count of at least one.
    """
    if any(is_missing(v) for v in (control_mean, variant_mean, control_n, variant_n)):
        logger.debug("no distribution curves: mean or sample size missing")
        return None
    if not (is_valid_sample_size(control_n) and is_valid_sample_size(variant_n)):
        logger.debug("no distribution curves: invalid sample size %r, %r", control_n, variant_n)
        return None

    control_mean = float(control_mean)
    variant_mean = float(variant_mean)

    se_c, se_v = standard_errors(
        control_mean,
        variant_mean,
        float(control_n),
        float(variant_n),
        control_std=control_std,
        variant_std=variant_std,
        is_proportion=is_proportion,
    )
    std_c = display_std(se_c)
    std_v = display_std(se_v)

    lo, hi = shared_domain(control_mean, variant_mean, std_c, std_v)
    xs = np.linspace(lo, hi, NUM_POINTS)
    ys_c = normal_pdf(xs, control_mean, std_c)
    ys_v = normal_pdf(xs, variant_mean, std_v)

    control_series = tuple(
        CurvePoint(x=float(x), series={CONTROL: float(y)}) for x, y in zip(xs, ys_c)
    )
    variant_series = tuple(
        CurvePoint(x=float(x), series={VARIANT: float(y)}) for x, y in zip(xs, ys_v)
    )
    return NormalCurves(
        control_series=control_series,
        variant_series=variant_series,
        control_mean=control_mean,
        variant_mean=variant_mean,
        control_display_std=std_c,
        variant_display_std=std_v,
    )


def synthesize_from_stats(
    control: SummaryStat,
    variant: SummaryStat,
    is_proportion: bool = True,
) -> Optional[NormalCurves]:
    """synthesize_normal_curves for two SummaryStat groups."""
    return synthesize_normal_curves(
        control.mean,
        variant.mean,
        control.n,
        variant.n,
        control_std=control.std,
        variant_std=variant.std,
        is_proportion=is_proportion,
    )
