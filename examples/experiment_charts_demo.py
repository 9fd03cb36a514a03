"""
Demo showing every experiment chart plus the live distribution preview.

Demonstrates:
- DistributionPreviewWidget recomputing curves as the form changes
- Survival, power, CI comparison, rate comparison and diff-in-diff figures
  built from a canned statistics-service payload
- ChartStyle loaded from the per-user config file

Run:
    python examples/experiment_charts_demo.py
"""

from nicegui import ui

from expcharts.curves import (
    approximate_power_curve,
    approximate_survival,
    bar_comparison_from_result,
    diff_in_diff_trend,
)
from expcharts.plotting import (
    ChartStyleConfig,
    ci_comparison_figure,
    diff_in_diff_figure,
    power_curve_figure,
    rate_comparison_figure,
    survival_figure,
)
from expcharts.preview_widget import DistributionPreviewWidget, PreviewInputs
from expcharts.utils.logging import configure_logging

configure_logging(level="DEBUG")

SIGNIFICANCE_RESULT = {
    "control_rate": 0.050,
    "variant_rate": 0.058,
    "control_ci": [0.046, 0.054],
    "variant_ci": [0.054, 0.062],
    "p_value": 0.004,
}


@ui.page("/")
def index():
    style = ChartStyleConfig.load().get_style()

    ui.label("Experiment charts").classes("text-3xl font-bold mb-6")

    with ui.card().classes("w-full"):
        ui.label("Distribution preview").classes("text-xl font-bold")
        preview = DistributionPreviewWidget(style=style)
        preview.render()
        preview.set_inputs(PreviewInputs(control_mean=0.05, variant_mean=0.058, control_n=8000, variant_n=8000))

    with ui.row().classes("w-full gap-6"):
        with ui.column().classes("flex-1"):
            rows = bar_comparison_from_result(SIGNIFICANCE_RESULT)
            ui.plotly(ci_comparison_figure(rows, style=style)).classes("w-full h-48")
            ui.plotly(
                survival_figure(approximate_survival(30, 24), control_median=30, treatment_median=24, style=style)
            ).classes("w-full h-56")
        with ui.column().classes("flex-1"):
            ui.plotly(
                power_curve_figure(approximate_power_curve(1000, 80), required_n=1000, target_power=80, style=style)
            ).classes("w-full h-52")
            ui.plotly(rate_comparison_figure(0.42, 0.35, style=style)).classes("w-full h-40")
            ui.plotly(
                diff_in_diff_figure(diff_in_diff_trend(0.10, 0.11, 0.10, 0.15), style=style)
            ).classes("w-full h-56")


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(reload=False)
