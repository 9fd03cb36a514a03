"""Spectrum and interval-position bar geometry.

Both shapes are horizontal tracks with markers placed through range_mapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from expcharts.curves.range_mapper import build_window, to_percent
from expcharts.curves.types import DisplayWindow, is_missing
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)

# Spectrum padding on each side, as a fraction of the baseline.
SPECTRUM_PADDING = 0.4

# Continuous interval bars span [0, max(1.5 * upper, 2 * point)].
INTERVAL_UPPER_FACTOR = 1.5
INTERVAL_POINT_FACTOR = 2.0


@dataclass(frozen=True)
class SpectrumGeometry:
    """Marker positions (percent of track width) for a detectable-effect spectrum."""

    window: DisplayWindow
    lower: float
    upper: float
    baseline_pos: float
    lower_pos: float
    upper_pos: float
    gray_area_start: float
    gray_area_width: float
    target_pos: Optional[float] = None


@dataclass(frozen=True)
class IntervalBar:
    """Fill and point positions (percent) for a single confidence interval."""

    window: DisplayWindow
    fill_left: float
    fill_width: float
    point_pos: float


def effect_size_spectrum(
    baseline: Optional[float],
    mde_percent: Optional[float],
    expected: Optional[float] = None,
) -> Optional[SpectrumGeometry]:
    """
    Place baseline, ±MDE bounds and an optional target on a spectrum track.

    The gray area spans baseline * (1 - mde/100) to baseline * (1 + mde/100):
    changes inside it are too small to detect. The track window is the gray
    area padded by 0.4 * baseline on each side, clamped at 0.

    Returns None when baseline or mde is missing/zero, or when the window
    collapses to a point.
    """
    if is_missing(baseline) or is_missing(mde_percent):
        logger.debug("no spectrum: baseline=%r mde=%r", baseline, mde_percent)
        return None

    baseline = float(baseline)
    mde = float(mde_percent)
    lower = baseline * (1.0 - mde / 100.0)
    upper = baseline * (1.0 + mde / 100.0)

    window = build_window(
        [lower, upper],
        padding=abs(baseline) * SPECTRUM_PADDING,
        clamp_non_negative=True,
    )
    if window is None or window.is_degenerate:
        return None

    lower_pos = to_percent(lower, window)
    upper_pos = to_percent(upper, window)
    target_pos = to_percent(float(expected), window) if expected is not None else None

    return SpectrumGeometry(
        window=window,
        lower=lower,
        upper=upper,
        baseline_pos=to_percent(baseline, window),
        lower_pos=lower_pos,
        upper_pos=upper_pos,
        gray_area_start=lower_pos,
        gray_area_width=upper_pos - lower_pos,
        target_pos=target_pos,
    )


def interval_position_bar(
    lower: Optional[float],
    upper: Optional[float],
    point: Optional[float],
    is_proportion: bool = True,
) -> Optional[IntervalBar]:
    """
    Position a confidence interval and its point estimate on a track.

    Proportions use the fixed window [0, 1]. Continuous metrics use
    [0, max(1.5 * upper, 2 * point)].
    """
    if lower is None or upper is None or point is None:
        return None

    if is_proportion:
        window = DisplayWindow(min=0.0, max=1.0)
    else:
        w_max = max(INTERVAL_UPPER_FACTOR * upper, INTERVAL_POINT_FACTOR * point)
        if w_max <= 0:
            logger.debug("no interval bar: non-positive window max %r", w_max)
            return None
        window = DisplayWindow(min=0.0, max=w_max)

    lower_pos = to_percent(lower, window)
    upper_pos = to_percent(upper, window)
    return IntervalBar(
        window=window,
        fill_left=lower_pos,
        fill_width=upper_pos - lower_pos,
        point_pos=to_percent(point, window),
    )
