"""Unit tests for the shared value objects."""

from __future__ import annotations

import math

import pytest

from expcharts.curves.types import CurvePoint, DisplayWindow, SummaryStat, is_missing


def test_summary_stat_proportion_std():
    stat = SummaryStat.proportion(0.2, 100)
    assert stat.std == pytest.approx(0.4)
    assert stat.standard_error == pytest.approx(0.04)


def test_summary_stat_without_std_has_no_standard_error():
    assert SummaryStat(mean=3.0, n=10).standard_error is None


@pytest.mark.parametrize("kwargs", [dict(mean=1.0, n=0), dict(mean=1.0, n=5, std=-0.1)])
def test_summary_stat_invariants(kwargs):
    with pytest.raises(ValueError):
        SummaryStat(**kwargs)


def test_summary_stat_frozen():
    stat = SummaryStat(mean=1.0, n=2)
    with pytest.raises(Exception):  # FrozenInstanceError
        stat.n = 3  # type: ignore[misc]


@pytest.mark.parametrize("value", [None, 0, 0.0, math.nan, "abc"])
def test_is_missing_true(value):
    assert is_missing(value)


@pytest.mark.parametrize("value", [1, -0.5, 1e-9, "0.3"])
def test_is_missing_false(value):
    assert not is_missing(value)


def test_curve_point_value():
    p = CurvePoint(x=1.0, series={"power": 42.0})
    assert p.value("power") == 42.0
    with pytest.raises(KeyError):
        p.value("control")


def test_display_window_span():
    w = DisplayWindow(min=1.0, max=4.0)
    assert w.span == 3.0
    assert not w.is_degenerate
