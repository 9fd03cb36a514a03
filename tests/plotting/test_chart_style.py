"""Unit tests for ChartStyle serialization and theme helpers."""

from __future__ import annotations

import pytest

from expcharts.plotting.chart_style import ChartStyle
from expcharts.plotting.theme import ThemeMode, get_theme_template, resolve_theme


def test_chart_style_to_dict_theme_is_string():
    d = ChartStyle(theme=ThemeMode.DARK).to_dict()
    assert d["theme"] == "dark"
    assert d["control_color"] == "#2d6d9a"


def test_chart_style_from_dict_round_trip():
    style = ChartStyle(control_color="#000000", line_width=3.0, theme=ThemeMode.DARK)
    restored = ChartStyle.from_dict(style.to_dict())
    assert restored == style


def test_chart_style_from_dict_ignores_unknown_keys():
    style = ChartStyle.from_dict({"control_color": "#123456", "bogus": 1})
    assert style.control_color == "#123456"
    assert style.treatment_color == ChartStyle().treatment_color


def test_chart_style_from_dict_rejects_unknown_theme():
    with pytest.raises(ValueError):
        ChartStyle.from_dict({"theme": "sepia"})


@pytest.mark.parametrize(
    "name, expected",
    [("plotly_dark", ThemeMode.DARK), ("plotly_white", ThemeMode.LIGHT), ("Dark", ThemeMode.DARK)],
)
def test_chart_style_from_dict_accepts_template_names(name, expected):
    assert ChartStyle.from_dict({"theme": name}).theme is expected


def test_chart_style_frozen():
    style = ChartStyle()
    with pytest.raises(Exception):  # FrozenInstanceError
        style.line_width = 9  # type: ignore[misc]


@pytest.mark.parametrize(
    "value, expected",
    [("dark", ThemeMode.DARK), ("plotly_dark", ThemeMode.DARK), ("LIGHT", ThemeMode.LIGHT),
     (None, ThemeMode.LIGHT), (ThemeMode.DARK, ThemeMode.DARK)],
)
def test_resolve_theme(value, expected):
    assert resolve_theme(value) is expected


def test_resolve_theme_rejects_unknown_name():
    with pytest.raises(ValueError):
        resolve_theme("sepia")


def test_theme_template():
    assert get_theme_template(ThemeMode.DARK) == "plotly_dark"
    assert get_theme_template(ThemeMode.LIGHT) == "plotly_white"
