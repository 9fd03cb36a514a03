"""
expcharts: curve synthesis and chart layout for experiment results.

This package provides:
- Curve algorithms (expcharts.curves): distribution, survival and power
  curves, display windows and comparative bar/trend series, all computed
  from summary statistics only
- Plotly figure builders and chart styling (expcharts.plotting)
- DistributionPreviewWidget: NiceGUI live preview for form inputs
- Logging utilities for library and application use

For logging configuration in standalone scripts/demos:
    ```python
    from expcharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from expcharts.utils.logging import configure_logging, get_logger

from expcharts.curves import (
    approximate_power_curve,
    approximate_survival,
    bar_comparison,
    build_window,
    diff_in_diff_trend,
    percent_change,
    rank_groups,
    synthesize_normal_curves,
    to_percent,
)
from expcharts.plotting import ChartStyle, ChartStyleConfig, ThemeMode

# NullHandler so records don't reach root when no application configured
# logging. Demos call configure_logging() to attach a real handler.
_logger = logging.getLogger("expcharts")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ChartStyle",
    "ChartStyleConfig",
    "ThemeMode",
    "approximate_power_curve",
    "approximate_survival",
    "bar_comparison",
    "build_window",
    "configure_logging",
    "diff_in_diff_trend",
    "get_logger",
    "percent_change",
    "rank_groups",
    "synthesize_normal_curves",
    "to_percent",
]

__version__ = "0.1.0"
