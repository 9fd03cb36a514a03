"""Plotly rendering for experiment charts."""

from expcharts.plotting.chart_style import ChartStyle
from expcharts.plotting.chart_style_config import ChartStyleConfig
from expcharts.plotting.figures import (
    ci_comparison_figure,
    diff_in_diff_figure,
    distribution_figure,
    empty_figure,
    power_curve_figure,
    rate_comparison_figure,
    survival_figure,
)
from expcharts.plotting.theme import ThemeMode

__all__ = [
    "ChartStyle",
    "ChartStyleConfig",
    "ThemeMode",
    "ci_comparison_figure",
    "diff_in_diff_figure",
    "distribution_figure",
    "empty_figure",
    "power_curve_figure",
    "rate_comparison_figure",
    "survival_figure",
]
