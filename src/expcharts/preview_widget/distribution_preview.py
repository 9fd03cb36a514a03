"""Distribution preview widget.

Self-contained NiceGUI widget with number inputs for two groups and a live
distribution chart. Recomputes the curves on every input change, before any
request goes to the statistics service. Uses Plotly dicts only for ui.plotly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from nicegui import ui

from expcharts.curves.normal_curve import NormalCurves, synthesize_normal_curves
from expcharts.plotting.chart_style import ChartStyle
from expcharts.plotting.figures import distribution_figure, empty_figure
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)


def _safe_call(func: Callable, *args, **kwargs) -> None:
    """Safely call a function, catching 'client deleted' RuntimeErrors only."""
    try:
        func(*args, **kwargs)
    except RuntimeError as e:
        if "deleted" not in str(e).lower():
            raise


@dataclass(frozen=True)
class PreviewInputs:
    """Immutable snapshot of the form values."""

    control_mean: Optional[float] = None
    variant_mean: Optional[float] = None
    control_n: Optional[float] = None
    variant_n: Optional[float] = None
    control_std: Optional[float] = None
    variant_std: Optional[float] = None
    is_proportion: bool = True


OnPreviewChange = Callable[[Optional[NormalCurves]], None]


class DistributionPreviewWidget:
    """Live control/variant distribution preview.

    Emits the synthesized NormalCurves (or None when inputs are incomplete)
    through on_change after every recompute.
    """

    def __init__(
        self,
        *,
        on_change: Optional[OnPreviewChange] = None,
        style: Optional[ChartStyle] = None,
    ) -> None:
        self._on_change = on_change
        self._style = style or ChartStyle()
        self._inputs = PreviewInputs()
        self._curves: Optional[NormalCurves] = None
        self._updating_programmatically = False

        self._control_mean_input: Optional[ui.number] = None
        self._variant_mean_input: Optional[ui.number] = None
        self._control_n_input: Optional[ui.number] = None
        self._variant_n_input: Optional[ui.number] = None
        self._control_std_input: Optional[ui.number] = None
        self._variant_std_input: Optional[ui.number] = None
        self._proportion_checkbox: Optional[ui.checkbox] = None
        self._plot: Optional[ui.plotly] = None

    @property
    def curves(self) -> Optional[NormalCurves]:
        return self._curves

    @property
    def inputs(self) -> PreviewInputs:
        return self._inputs

    def render(self) -> None:
        """Create the inputs and chart inside the current container."""
        self._updating_programmatically = False

        with ui.row().classes("w-full gap-4 items-center"):
            self._proportion_checkbox = ui.checkbox("Conversion rate", value=True)
            self._proportion_checkbox.on("update:model-value", self._on_input_change)

        # Row: control group
        with ui.row().classes("w-full gap-2 items-center"):
            ui.label("Control").classes("w-20")
            self._control_mean_input = ui.number("Mean / rate", format="%.4f").classes("flex-1")
            self._control_n_input = ui.number("Visitors", min=1, step=1).classes("flex-1")
            self._control_std_input = ui.number("Std dev", min=0).classes("flex-1")

        # Row: variant group
        with ui.row().classes("w-full gap-2 items-center"):
            ui.label("Variant").classes("w-20")
            self._variant_mean_input = ui.number("Mean / rate", format="%.4f").classes("flex-1")
            self._variant_n_input = ui.number("Visitors", min=1, step=1).classes("flex-1")
            self._variant_std_input = ui.number("Std dev", min=0).classes("flex-1")

        for element in (
            self._control_mean_input,
            self._control_n_input,
            self._control_std_input,
            self._variant_mean_input,
            self._variant_n_input,
            self._variant_std_input,
        ):
            element.on("update:model-value", self._on_input_change, throttle=0.2)

        self._plot = ui.plotly(empty_figure(self._style)).classes("w-full h-52")
        self._update_plot()

    def set_inputs(self, inputs: PreviewInputs) -> None:
        """Fill the form from PreviewInputs and recompute."""
        _safe_call(self._set_inputs_impl, inputs)

    def _set_inputs_impl(self, inputs: PreviewInputs) -> None:
        self._updating_programmatically = True
        try:
            for element, value in (
                (self._control_mean_input, inputs.control_mean),
                (self._variant_mean_input, inputs.variant_mean),
                (self._control_n_input, inputs.control_n),
                (self._variant_n_input, inputs.variant_n),
                (self._control_std_input, inputs.control_std),
                (self._variant_std_input, inputs.variant_std),
            ):
                if element is not None:
                    element.value = value
            if self._proportion_checkbox is not None:
                self._proportion_checkbox.value = inputs.is_proportion
        finally:
            self._updating_programmatically = False
        self._recompute(inputs)

    def set_style(self, style: ChartStyle) -> None:
        """Update chart style (colors, theme)."""
        _safe_call(self._set_style_impl, style)

    def _set_style_impl(self, style: ChartStyle) -> None:
        self._style = style
        self._update_plot()

    def _read_inputs(self) -> PreviewInputs:
        def _val(element: Optional[ui.number]) -> Optional[float]:
            return element.value if element is not None else None

        return PreviewInputs(
            control_mean=_val(self._control_mean_input),
            variant_mean=_val(self._variant_mean_input),
            control_n=_val(self._control_n_input),
            variant_n=_val(self._variant_n_input),
            control_std=_val(self._control_std_input),
            variant_std=_val(self._variant_std_input),
            is_proportion=(
                bool(self._proportion_checkbox.value)
                if self._proportion_checkbox is not None
                else True
            ),
        )

    def _on_input_change(self) -> None:
        if self._updating_programmatically:
            return
        self._recompute(self._read_inputs())

    def _recompute(self, inputs: PreviewInputs) -> None:
        self._inputs = inputs
        self._curves = synthesize_normal_curves(
            inputs.control_mean,
            inputs.variant_mean,
            inputs.control_n,
            inputs.variant_n,
            control_std=inputs.control_std,
            variant_std=inputs.variant_std,
            is_proportion=inputs.is_proportion,
        )
        logger.debug("preview recomputed, curves=%s", "yes" if self._curves else "none")
        self._update_plot()
        if self._on_change is not None:
            self._on_change(self._curves)

    def _update_plot(self) -> None:
        if self._plot is None:
            return
        fig_dict = distribution_figure(
            self._curves,
            style=self._style,
            is_proportion=self._inputs.is_proportion,
        )
        try:
            self._plot.update_figure(fig_dict)
        except RuntimeError as e:
            if "deleted" not in str(e).lower():
                raise
