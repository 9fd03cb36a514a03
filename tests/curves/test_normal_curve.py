"""Unit tests for normal curve synthesis (distribution preview/comparison)."""

from __future__ import annotations

import math

import pytest

from expcharts.curves.normal_curve import (
    DISPLAY_STD_FLOOR,
    NUM_POINTS,
    display_std,
    normal_pdf,
    standard_errors,
    synthesize_from_stats,
    synthesize_normal_curves,
)
from expcharts.curves.types import SummaryStat


@pytest.fixture
def conversion_curves():
    """Scenario: 5% vs 6% conversion with 10k visitors each."""
    return synthesize_normal_curves(0.05, 0.06, 10000, 10000, is_proportion=True)


def _peak_x(series, name):
    best = max(series, key=lambda p: p.value(name))
    return best.x


def test_conversion_curves_have_101_shared_points(conversion_curves):
    assert conversion_curves is not None
    assert len(conversion_curves.control_series) == NUM_POINTS == 101
    assert len(conversion_curves.variant_series) == 101
    xs_c = [p.x for p in conversion_curves.control_series]
    xs_v = [p.x for p in conversion_curves.variant_series]
    assert xs_c == xs_v


def test_conversion_curves_peak_near_means(conversion_curves):
    """Densities peak within one sample spacing of each mean."""
    lo, hi = conversion_curves.x_domain
    spacing = (hi - lo) / (NUM_POINTS - 1)
    assert abs(_peak_x(conversion_curves.control_series, "control") - 0.05) <= spacing
    assert abs(_peak_x(conversion_curves.variant_series, "variant") - 0.06) <= spacing


def test_x_values_strictly_increasing_and_finite(conversion_curves):
    xs = conversion_curves.x
    assert all(b > a for a, b in zip(xs, xs[1:]))
    for p in conversion_curves.control_series + conversion_curves.variant_series:
        assert math.isfinite(p.x)
        assert all(math.isfinite(v) for v in p.series.values())


@pytest.mark.parametrize(
    "control_mean, variant_mean, control_n, variant_n, is_proportion",
    [
        (0.05, 0.06, 10000, 10000, True),
        (0.5, 0.1, 20, 5000, True),
        (120.0, 80.0, 50, 50, False),
        (-3.0, 4.0, 1, 1000000, False),
        (0.999, 0.001, 1, 1, True),
    ],
)
def test_domain_contains_both_means(control_mean, variant_mean, control_n, variant_n, is_proportion):
    curves = synthesize_normal_curves(
        control_mean, variant_mean, control_n, variant_n, is_proportion=is_proportion
    )
    lo, hi = curves.x_domain
    assert lo < control_mean < hi
    assert lo < variant_mean < hi


@pytest.mark.parametrize(
    "args",
    [
        (None, 0.06, 100, 100),
        (0.05, None, 100, 100),
        (0.05, 0.06, 0, 100),
        (0.05, 0.06, 100, None),
        (0, 0.06, 100, 100),
        (0.05, float("nan"), 100, 100),
        (0.05, 0.06, -100, 100),
        (0.05, 0.06, 100, float("inf")),
        (0.05, 0.06, 0.5, 100),
    ],
)
def test_missing_or_zero_inputs_return_none(args):
    assert synthesize_normal_curves(*args) is None


@pytest.mark.parametrize(
    "control_n, variant_n, is_proportion",
    [(-100, 100, True), (100, -5, True), (-100, 100, False), (100, -5, False)],
)
def test_negative_sample_size_returns_none(control_n, variant_n, is_proportion):
    """A negative visitor count typed into the form gives no curves."""
    curves = synthesize_normal_curves(
        10.0 if not is_proportion else 0.05,
        12.0 if not is_proportion else 0.06,
        control_n,
        variant_n,
        3.0,
        3.0,
        is_proportion=is_proportion,
    )
    assert curves is None


def test_synthesize_from_stats_matches_scalar_call():
    control = SummaryStat(mean=120.0, n=50, std=30.0)
    variant = SummaryStat(mean=80.0, n=50)
    curves = synthesize_from_stats(control, variant, is_proportion=False)
    expected = synthesize_normal_curves(120.0, 80.0, 50, 50, 30.0, None, is_proportion=False)
    assert curves == expected
    # variant borrows the control std
    assert curves.variant_display_std == pytest.approx(curves.control_display_std)


def test_zero_variance_uses_floor():
    """A rate of 1.0 has zero standard error; the curve width is floored."""
    curves = synthesize_normal_curves(1.0, 1.0, 100, 100, is_proportion=True)
    assert curves is not None
    assert curves.control_display_std == DISPLAY_STD_FLOOR
    assert all(math.isfinite(p.value("control")) for p in curves.control_series)


def test_display_std_scales_by_ten():
    assert display_std(0.002) == pytest.approx(0.02)
    assert display_std(0.0) == DISPLAY_STD_FLOOR


def test_continuous_std_fallbacks():
    """Variant borrows control std; with neither, std defaults to 1."""
    se_c, se_v = standard_errors(10.0, 12.0, 100, 400, control_std=5.0, is_proportion=False)
    assert se_c == pytest.approx(0.5)
    assert se_v == pytest.approx(0.25)

    se_c, se_v = standard_errors(10.0, 12.0, 100, 100, is_proportion=False)
    assert se_c == pytest.approx(0.1)
    assert se_v == pytest.approx(0.1)


def test_control_does_not_borrow_variant_std():
    se_c, se_v = standard_errors(10.0, 12.0, 4, 4, variant_std=8.0, is_proportion=False)
    assert se_c == pytest.approx(0.5)
    assert se_v == pytest.approx(4.0)


def test_proportion_standard_error():
    se_c, _ = standard_errors(0.05, 0.06, 10000, 10000, is_proportion=True)
    assert se_c == pytest.approx(math.sqrt(0.05 * 0.95 / 10000))


def test_normal_pdf_peak_value():
    assert normal_pdf(0.0, 0.0, 1.0) == pytest.approx(1.0 / math.sqrt(2 * math.pi))
    assert normal_pdf(1.0, 0.0, 1.0) == pytest.approx(normal_pdf(-1.0, 0.0, 1.0))


def test_synthesis_is_deterministic():
    a = synthesize_normal_curves(25.0, 27.5, 300, 310, 9.0, 11.0, is_proportion=False)
    b = synthesize_normal_curves(25.0, 27.5, 300, 310, 9.0, 11.0, is_proportion=False)
    assert a == b


def test_to_frame_columns(conversion_curves):
    df = conversion_curves.to_frame()
    assert list(df.columns) == ["x", "control", "variant"]
    assert len(df) == 101
    assert df["x"].is_monotonic_increasing
