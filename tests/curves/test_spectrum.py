"""Unit tests for spectrum and interval-bar geometry."""

from __future__ import annotations

import pytest

from expcharts.curves.spectrum import effect_size_spectrum, interval_position_bar


def test_effect_size_spectrum_positions():
    """Baseline 5%, MDE 10%: gray area 4.5%-5.5%, window padded by 2% each side."""
    geom = effect_size_spectrum(5.0, 10.0, expected=5.5)
    assert geom is not None
    assert geom.lower == pytest.approx(4.5)
    assert geom.upper == pytest.approx(5.5)
    assert geom.window.min == pytest.approx(2.5)
    assert geom.window.max == pytest.approx(7.5)
    assert geom.baseline_pos == pytest.approx(50.0)
    assert geom.lower_pos == pytest.approx(40.0)
    assert geom.upper_pos == pytest.approx(60.0)
    assert geom.gray_area_start == pytest.approx(40.0)
    assert geom.gray_area_width == pytest.approx(20.0)
    assert geom.target_pos == pytest.approx(60.0)


def test_effect_size_spectrum_clamps_at_zero():
    geom = effect_size_spectrum(1.0, 90.0)
    assert geom.window.min == 0.0
    assert geom.target_pos is None


@pytest.mark.parametrize("args", [(None, 10.0), (5.0, None), (0, 10.0), (5.0, 0)])
def test_effect_size_spectrum_missing_inputs(args):
    assert effect_size_spectrum(*args) is None


def test_interval_bar_proportion_uses_unit_window():
    bar = interval_position_bar(0.04, 0.06, 0.05, is_proportion=True)
    assert bar.window.max == 1.0
    assert bar.fill_left == pytest.approx(4.0)
    assert bar.fill_width == pytest.approx(2.0)
    assert bar.point_pos == pytest.approx(5.0)


def test_interval_bar_continuous_window():
    bar = interval_position_bar(40.0, 60.0, 50.0, is_proportion=False)
    # max(1.5 * 60, 2 * 50) = 100
    assert bar.window.max == pytest.approx(100.0)
    assert bar.fill_left == pytest.approx(40.0)
    assert bar.point_pos == pytest.approx(50.0)


def test_interval_bar_degenerate_continuous_returns_none():
    assert interval_position_bar(0.0, 0.0, 0.0, is_proportion=False) is None
    assert interval_position_bar(None, 1.0, 0.5) is None
