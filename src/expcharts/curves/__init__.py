"""Curve synthesis and layout algorithms.

Pure numpy/pandas functions that turn experiment summary statistics into
point sequences and percent positions. No I/O and no state: identical
inputs always give identical outputs, and missing inputs give None.
"""

from expcharts.curves.comparative_series import (
    DiffInDiffSummary,
    PairwiseOutcome,
    bar_comparison,
    bar_comparison_from_result,
    comparison_window,
    counterfactual_post,
    diff_in_diff_summary,
    diff_in_diff_trend,
    is_defined,
    pairwise_outcome,
    percent_change,
    rank_groups,
    rate_comparison_window,
    trend_window,
)
from expcharts.curves.normal_curve import (
    NormalCurves,
    normal_pdf,
    synthesize_from_stats,
    synthesize_normal_curves,
)
from expcharts.curves.power_curve import approximate_power_curve, first_n_reaching, power_at
from expcharts.curves.range_mapper import build_window, clip_percent, scaled_window, to_percent
from expcharts.curves.spectrum import (
    IntervalBar,
    SpectrumGeometry,
    effect_size_spectrum,
    interval_position_bar,
)
from expcharts.curves.survival_curve import approximate_survival, survival_at
from expcharts.curves.types import (
    BarSeriesRow,
    CurvePoint,
    DisplayWindow,
    Period,
    SummaryStat,
    TrendSeriesRow,
    is_missing,
    is_valid_sample_size,
)

__all__ = [
    "BarSeriesRow",
    "CurvePoint",
    "DiffInDiffSummary",
    "DisplayWindow",
    "IntervalBar",
    "NormalCurves",
    "PairwiseOutcome",
    "Period",
    "SpectrumGeometry",
    "SummaryStat",
    "TrendSeriesRow",
    "approximate_power_curve",
    "approximate_survival",
    "bar_comparison",
    "bar_comparison_from_result",
    "build_window",
    "clip_percent",
    "comparison_window",
    "counterfactual_post",
    "diff_in_diff_summary",
    "diff_in_diff_trend",
    "effect_size_spectrum",
    "first_n_reaching",
    "interval_position_bar",
    "is_defined",
    "is_missing",
    "is_valid_sample_size",
    "normal_pdf",
    "pairwise_outcome",
    "percent_change",
    "power_at",
    "rank_groups",
    "rate_comparison_window",
    "scaled_window",
    "survival_at",
    "synthesize_from_stats",
    "synthesize_normal_curves",
    "to_percent",
    "trend_window",
]
