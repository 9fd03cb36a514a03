"""
Comparative series: bar comparisons, diff-in-difference trends, rankings.

Row order is fixed: bars are always [control, treatment] and trend rows are
always [pre, post], so axis labels stay put across renders.

Assumptions (documented):
  1. Missing confidence interval: a bar without a CI gets the degenerate
     interval [value, value].
  2. Parallel trends: the post-period counterfactual for the treatment group
     is treatment_pre + (control_post - control_pre). The pre-period has no
     counterfactual.
  3. Percent change against a zero control is undefined. It is returned as
     inf/-inf/nan and callers check is_defined() before displaying it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

import pandas as pd

from expcharts.curves.range_mapper import build_window, scaled_window
from expcharts.curves.types import (
    BarSeriesRow,
    DisplayWindow,
    Period,
    TrendSeriesRow,
)
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)

CONTROL = "control"
TREATMENT = "treatment"

# Value-axis headroom above the largest CI bound (CI comparison chart).
CI_AXIS_HEADROOM = 1.15

# Value-axis headroom above the largest rate (rate comparison chart).
RATE_AXIS_HEADROOM = 1.3

# Trend chart axis: 10% outward from the observed min and max.
TREND_AXIS_LOWER = 0.9
TREND_AXIS_UPPER = 1.1


# -----------------------------------------------------------------------------
# Bar comparison
# -----------------------------------------------------------------------------


def _bar_row(label: str, value: float, ci: Optional[Sequence[float]]) -> BarSeriesRow:
    if ci is None:
        return BarSeriesRow(label=label, value=float(value), ci_low=float(value), ci_high=float(value))
    return BarSeriesRow(label=label, value=float(value), ci_low=float(ci[0]), ci_high=float(ci[1]))


def bar_comparison(
    control_value: Optional[float],
    treatment_value: Optional[float],
    control_ci: Optional[Sequence[float]] = None,
    treatment_ci: Optional[Sequence[float]] = None,
    labels: tuple[str, str] = ("Control", "Treatment"),
) -> Optional[tuple[BarSeriesRow, BarSeriesRow]]:
    """
    Two bar rows, control first.

    Returns None when either value is missing. Zero is a valid bar value.
    """
    if control_value is None or treatment_value is None:
        logger.debug("no bar comparison: control=%r treatment=%r", control_value, treatment_value)
        return None
    return (
        _bar_row(labels[0], control_value, control_ci),
        _bar_row(labels[1], treatment_value, treatment_ci),
    )


def bar_comparison_from_result(
    result: Mapping[str, Any],
    is_proportion: bool = True,
    treatment_key: str = "variant",
) -> Optional[tuple[BarSeriesRow, BarSeriesRow]]:
    """
    Bar rows from a statistics service result payload.

    Reads control_rate / <treatment_key>_rate for proportions and
    control_mean / <treatment_key>_mean otherwise, plus the optional
    control_ci / <treatment_key>_ci pairs.
    """
    suffix = "rate" if is_proportion else "mean"
    return bar_comparison(
        result.get(f"control_{suffix}"),
        result.get(f"{treatment_key}_{suffix}"),
        control_ci=result.get("control_ci"),
        treatment_ci=result.get(f"{treatment_key}_ci"),
        labels=("Control", treatment_key.capitalize()),
    )


def comparison_window(
    rows: Sequence[BarSeriesRow],
    headroom: float = CI_AXIS_HEADROOM,
) -> Optional[DisplayWindow]:
    """Value axis [0, headroom * largest upper CI bound]."""
    return scaled_window([r.ci_high for r in rows], upper_factor=headroom)


def rate_comparison_window(
    control_rate: float,
    treatment_rate: float,
    headroom: float = RATE_AXIS_HEADROOM,
) -> Optional[DisplayWindow]:
    """Value axis [0, headroom * larger rate]."""
    return scaled_window([control_rate, treatment_rate], upper_factor=headroom)


# -----------------------------------------------------------------------------
# Percent change
# -----------------------------------------------------------------------------


def percent_change(control: float, treatment: float) -> float:
    """(treatment - control) / control * 100.

    control == 0 gives inf or -inf (nonzero difference) or nan (no difference).
    """
    diff = float(treatment) - float(control)
    if control == 0:
        if diff == 0:
            return math.nan
        return math.copysign(math.inf, diff)
    return diff / float(control) * 100.0


def is_defined(value: Optional[float]) -> bool:
    """True when value is a displayable finite number."""
    return value is not None and math.isfinite(value)


# -----------------------------------------------------------------------------
# Diff-in-difference
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class DiffInDiffSummary:
    """Changes per group and the treatment effect against the counterfactual."""

    control_change: float
    treatment_change: float
    counterfactual_post: float
    implied_effect: float


def counterfactual_post(control_pre: float, control_post: float, treatment_pre: float) -> float:
    """Treatment post-period value under parallel trends."""
    return treatment_pre + (control_post - control_pre)


def diff_in_diff_trend(
    control_pre: Optional[float],
    control_post: Optional[float],
    treatment_pre: Optional[float],
    treatment_post: Optional[float],
) -> Optional[tuple[TrendSeriesRow, TrendSeriesRow]]:
    """
    Pre and post trend rows for the parallel-trends chart.

    Returns None when any of the four values is missing.
    """
    values = (control_pre, control_post, treatment_pre, treatment_post)
    if any(v is None for v in values):
        logger.debug("no diff-in-diff trend: %r", values)
        return None
    control_pre, control_post, treatment_pre, treatment_post = (float(v) for v in values)

    pre = TrendSeriesRow(
        period=Period.PRE,
        observed={CONTROL: control_pre, TREATMENT: treatment_pre},
        counterfactual=None,
    )
    post = TrendSeriesRow(
        period=Period.POST,
        observed={CONTROL: control_post, TREATMENT: treatment_post},
        counterfactual=counterfactual_post(control_pre, control_post, treatment_pre),
    )
    return pre, post


def diff_in_diff_summary(
    control_pre: float,
    control_post: float,
    treatment_pre: float,
    treatment_post: float,
) -> DiffInDiffSummary:
    cf = counterfactual_post(control_pre, control_post, treatment_pre)
    return DiffInDiffSummary(
        control_change=control_post - control_pre,
        treatment_change=treatment_post - treatment_pre,
        counterfactual_post=cf,
        implied_effect=treatment_post - cf,
    )


def trend_window(rows: Sequence[TrendSeriesRow]) -> Optional[DisplayWindow]:
    """
    Value axis over the observed values, widened 10% away from each bound.

    Positive data gives [0.9 * min, 1.1 * max]. For a negative bound the
    factors swap so the window still contains every observation.
    """
    window = build_window([v for r in rows for v in r.observed.values()])
    if window is None:
        return None
    lo, hi = window.min, window.max
    w_min = lo * (TREND_AXIS_LOWER if lo >= 0 else TREND_AXIS_UPPER)
    w_max = hi * (TREND_AXIS_UPPER if hi >= 0 else TREND_AXIS_LOWER)
    return DisplayWindow(min=w_min, max=w_max)


# -----------------------------------------------------------------------------
# Multi-group ranking
# -----------------------------------------------------------------------------


def rank_groups(
    groups: Sequence[Mapping[str, Any]],
    metric: str,
) -> pd.DataFrame:
    """
    Sort groups by `metric` descending for display.

    Uses a stable sort, so ties keep their input order. Groups missing the
    metric sort last.

    Args:
        groups: Per-group records, e.g. the service's "variants" list.
        metric: Primary outcome column ("rate" or "mean").

    Returns:
        DataFrame of the groups in display order, with a fresh RangeIndex.
    """
    df = pd.DataFrame(list(groups))
    if df.empty:
        return df
    if metric not in df.columns:
        raise ValueError(f"Unknown ranking metric '{metric}'")
    key = pd.to_numeric(df[metric], errors="coerce")
    order = key.sort_values(ascending=False, kind="stable", na_position="last").index
    return df.loc[order].reset_index(drop=True)


@dataclass(frozen=True)
class PairwiseOutcome:
    winner: str
    loser: str
    abs_lift_percent: float


def pairwise_outcome(comparison: Mapping[str, Any]) -> PairwiseOutcome:
    """Winner and loser of a pairwise comparison payload.

    variant_b wins when lift_percent > 0, otherwise variant_a.
    """
    lift = float(comparison["lift_percent"])
    a = str(comparison["variant_a"])
    b = str(comparison["variant_b"])
    if lift > 0:
        return PairwiseOutcome(winner=b, loser=a, abs_lift_percent=abs(lift))
    return PairwiseOutcome(winner=a, loser=b, abs_lift_percent=abs(lift))
