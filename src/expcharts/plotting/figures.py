"""Plotly figure builders for experiment charts.

Every builder returns a Plotly figure dict (never go.Figure) for
ui.plotly / update_figure. A None input gives an empty themed figure.
"""

from __future__ import annotations

from typing import Optional, Sequence

import plotly.graph_objects as go

from expcharts.curves.comparative_series import (
    CONTROL,
    TREATMENT,
    bar_comparison,
    comparison_window,
    rate_comparison_window,
    trend_window,
)
from expcharts.curves.normal_curve import NormalCurves
from expcharts.curves.power_curve import POWER
from expcharts.curves.types import BarSeriesRow, CurvePoint, DisplayWindow, TrendSeriesRow
from expcharts.plotting.chart_style import ChartStyle
from expcharts.plotting.theme import get_grid_color, get_theme_colors, get_theme_template

PERIOD_LABELS = {"pre": "Pre-Period", "post": "Post-Period"}


def _with_alpha(hex_color: str, alpha: float) -> str:
    """'#rrggbb' -> 'rgba(r,g,b,alpha)'."""
    h = hex_color.lstrip("#")
    r, g, b = int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)
    return f"rgba({r},{g},{b},{alpha})"


def _apply_theme(fig: go.Figure, style: ChartStyle) -> None:
    bg_color, fg_color = get_theme_colors(style.theme)
    fig.update_layout(
        template=get_theme_template(style.theme),
        paper_bgcolor=bg_color,
        plot_bgcolor=bg_color,
        font=dict(color=fg_color),
        margin=dict(l=20, r=30, t=30, b=20),
        showlegend=style.show_legend,
    )


def _axis(style: ChartStyle, **kwargs) -> dict:
    _, fg_color = get_theme_colors(style.theme)
    return dict(color=fg_color, gridcolor=get_grid_color(style.theme), **kwargs)


def _axis_range(window: Optional[DisplayWindow]) -> Optional[list[float]]:
    if window is None or window.is_degenerate:
        return None
    return [window.min, window.max]


def empty_figure(style: Optional[ChartStyle] = None) -> dict:
    """An empty, themed figure dict."""
    style = style or ChartStyle()
    fig = go.Figure()
    _apply_theme(fig, style)
    return fig.to_dict()


def distribution_figure(
    curves: Optional[NormalCurves],
    style: Optional[ChartStyle] = None,
    is_proportion: bool = True,
) -> dict:
    """Overlaid control/variant density curves with dashed mean markers."""
    style = style or ChartStyle()
    if curves is None:
        return empty_figure(style)

    df = curves.to_frame()
    fig = go.Figure()
    for name, label, color, fill in (
        ("control", "Control", style.control_color, style.control_fill),
        ("variant", "Variant", style.treatment_color, style.treatment_fill),
    ):
        fig.add_trace(
            go.Scatter(
                x=df["x"].tolist(),
                y=df[name].tolist(),
                mode="lines",
                name=label,
                line=dict(color=color, width=style.line_width),
                fill="tozeroy",
                fillcolor=_with_alpha(fill, style.fill_opacity),
            )
        )

    for mean, color in (
        (curves.control_mean, style.control_color),
        (curves.variant_mean, style.treatment_color),
    ):
        fig.add_vline(x=mean, line_dash="dash", line_color=color, line_width=style.reference_line_width)

    _apply_theme(fig, style)
    fig.update_layout(
        xaxis=_axis(style, tickformat=".1%" if is_proportion else ".1f"),
        yaxis=_axis(style, visible=False),
    )
    return fig.to_dict()


def survival_figure(
    points: Optional[Sequence[CurvePoint]],
    control_median: Optional[float] = None,
    treatment_median: Optional[float] = None,
    style: Optional[ChartStyle] = None,
) -> dict:
    """Step-drawn survival curves with the 50% line and median markers."""
    style = style or ChartStyle()
    if points is None:
        return empty_figure(style)

    t = [p.x for p in points]
    fig = go.Figure()
    for name, label, color, fill in (
        (CONTROL, "Control", style.control_color, style.control_fill),
        (TREATMENT, "Treatment", style.treatment_color, style.treatment_fill),
    ):
        fig.add_trace(
            go.Scatter(
                x=t,
                y=[p.value(name) for p in points],
                mode="lines",
                name=label,
                line=dict(color=color, width=style.line_width, shape="hv"),
                fill="tozeroy",
                fillcolor=_with_alpha(fill, style.fill_opacity),
            )
        )

    fig.add_hline(y=50, line_dash="dash", line_color=style.reference_color, opacity=0.5)
    if control_median is not None:
        fig.add_vline(x=control_median, line_dash="dash", line_color=style.control_color, opacity=0.6)
    if treatment_median is not None:
        fig.add_vline(x=treatment_median, line_dash="dash", line_color=style.treatment_color, opacity=0.6)

    _apply_theme(fig, style)
    fig.update_layout(
        xaxis=_axis(style, title="Time"),
        yaxis=_axis(style, title="Survival", range=[0, 100], ticksuffix="%", dtick=25),
    )
    return fig.to_dict()


def power_curve_figure(
    points: Optional[Sequence[CurvePoint]],
    required_n: Optional[float] = None,
    target_power: Optional[float] = None,
    style: Optional[ChartStyle] = None,
) -> dict:
    """Power vs. sample size with target-power and required-N reference lines."""
    style = style or ChartStyle()
    if points is None:
        return empty_figure(style)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=[p.x for p in points],
            y=[p.value(POWER) for p in points],
            mode="lines",
            name="Power curve",
            line=dict(color=style.power_color, width=style.line_width),
            fill="tozeroy",
            fillcolor=_with_alpha(style.power_fill, style.fill_opacity),
        )
    )
    if target_power is not None:
        fig.add_hline(y=target_power, line_dash="dash", line_color=style.treatment_color)
    if required_n is not None:
        fig.add_vline(x=required_n, line_dash="dash", line_color=style.control_color)

    _apply_theme(fig, style)
    fig.update_layout(
        xaxis=_axis(style, title="Sample size"),
        yaxis=_axis(style, title="Power", range=[0, 100], ticksuffix="%", dtick=20),
    )
    return fig.to_dict()


def ci_comparison_figure(
    rows: Optional[Sequence[BarSeriesRow]],
    style: Optional[ChartStyle] = None,
    is_proportion: bool = True,
) -> dict:
    """Horizontal control/variant bars with CI whiskers and a control baseline."""
    style = style or ChartStyle()
    if rows is None:
        return empty_figure(style)

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            y=[r.label for r in rows],
            x=[r.value for r in rows],
            orientation="h",
            marker=dict(
                color=[style.control_fill, style.treatment_fill],
                line=dict(color=[style.control_color, style.treatment_color], width=1),
            ),
            error_x=dict(
                type="data",
                array=[r.ci_high - r.value for r in rows],
                arrayminus=[r.value - r.ci_low for r in rows],
                visible=any(r.has_interval for r in rows),
            ),
        )
    )
    fig.add_vline(x=rows[0].value, line_dash="dash", line_color=style.control_color, opacity=0.6)

    _apply_theme(fig, style)
    fig.update_layout(
        xaxis=_axis(
            style,
            range=_axis_range(comparison_window(rows)),
            tickformat=".1%" if is_proportion else ".1f",
        ),
        yaxis=_axis(style, autorange="reversed"),
        showlegend=False,
    )
    return fig.to_dict()


def rate_comparison_figure(
    control_rate: Optional[float],
    treatment_rate: Optional[float],
    style: Optional[ChartStyle] = None,
    unit: str = "per day",
) -> dict:
    """Vertical event-rate bars; a lower treatment rate is drawn as the better outcome."""
    style = style or ChartStyle()
    rows = bar_comparison(control_rate, treatment_rate)
    if rows is None:
        return empty_figure(style)

    improved = treatment_rate < control_rate
    treatment_line = style.treatment_color if improved else style.worse_color
    treatment_fill = style.treatment_fill if improved else style.worse_fill

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=[r.label for r in rows],
            y=[r.value for r in rows],
            marker=dict(
                color=[style.control_fill, treatment_fill],
                line=dict(color=[style.control_color, treatment_line], width=1),
            ),
        )
    )
    fig.add_hline(y=control_rate, line_dash="dash", line_color=style.control_color, opacity=0.6)

    _apply_theme(fig, style)
    fig.update_layout(
        xaxis=_axis(style),
        yaxis=_axis(
            style,
            title=f"Rate ({unit})",
            range=_axis_range(rate_comparison_window(control_rate, treatment_rate)),
        ),
        showlegend=False,
    )
    return fig.to_dict()


def diff_in_diff_figure(
    rows: Optional[Sequence[TrendSeriesRow]],
    style: Optional[ChartStyle] = None,
    is_proportion: bool = True,
) -> dict:
    """Parallel-trends lines for control and treatment plus the counterfactual."""
    style = style or ChartStyle()
    if rows is None:
        return empty_figure(style)

    periods = [PERIOD_LABELS[r.period.value] for r in rows]
    fig = go.Figure()
    for name, label, color in (
        (CONTROL, "Control", style.control_color),
        (TREATMENT, "Treatment", style.treatment_color),
    ):
        fig.add_trace(
            go.Scatter(
                x=periods,
                y=[r.observed[name] for r in rows],
                mode="lines+markers",
                name=label,
                line=dict(color=color, width=style.line_width),
                marker=dict(color=color, size=style.marker_size),
            )
        )
    fig.add_trace(
        go.Scatter(
            x=periods,
            y=[r.counterfactual for r in rows],
            mode="lines+markers",
            name="Counterfactual",
            line=dict(color=style.counterfactual_color, width=style.counterfactual_line_width, dash="dash"),
            marker=dict(color=style.counterfactual_color, size=style.marker_size - 2),
            connectgaps=False,
        )
    )

    _apply_theme(fig, style)
    fig.update_layout(
        xaxis=_axis(style),
        yaxis=_axis(
            style,
            range=_axis_range(trend_window(rows)),
            tickformat=".1%" if is_proportion else ".0f",
        ),
    )
    return fig.to_dict()
