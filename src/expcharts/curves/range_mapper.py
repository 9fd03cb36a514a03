"""
Shared value -> percent scaling for bar and spectrum visualizations.

Every bar-like chart places markers by mapping a value into a display window
and expressing it as a percentage of the window width:

    percent = (value - window.min) / (window.max - window.min) * 100

Windows are built either by padding the value span (build_window) or by
scaling the extreme values (scaled_window). A window with max == min is
degenerate: to_percent returns None for it and callers render nothing.
"""

from __future__ import annotations

import math
from typing import Iterable, Optional

from expcharts.curves.types import DisplayWindow
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)


def _finite(values: Iterable[Optional[float]]) -> list[float]:
    out: list[float] = []
    for v in values:
        if v is None:
            continue
        f = float(v)
        if math.isfinite(f):
            out.append(f)
    return out


def build_window(
    values: Iterable[Optional[float]],
    padding_fraction: float = 0.0,
    *,
    padding: Optional[float] = None,
    clamp_non_negative: bool = False,
) -> Optional[DisplayWindow]:
    """
    Build a display window around the finite values.

    Args:
        values: Values the window must contain. None and non-finite are skipped.
        padding_fraction: Padding added on each side, as a fraction of the span.
        padding: Absolute padding on each side; overrides padding_fraction.
        clamp_non_negative: Clamp window.min at 0 (rates, counts).

    Returns:
        DisplayWindow, or None when no finite value is given. Identical values
        with no absolute padding give a degenerate window (max == min).
    """
    vals = _finite(values)
    if not vals:
        return None
    lo, hi = min(vals), max(vals)
    pad = padding if padding is not None else padding_fraction * (hi - lo)
    w_min = lo - pad
    w_max = hi + pad
    if clamp_non_negative:
        w_min = max(0.0, w_min)
        w_max = max(w_min, w_max)
    return DisplayWindow(min=w_min, max=w_max)


def scaled_window(
    values: Iterable[Optional[float]],
    *,
    upper_factor: float,
    lower_factor: Optional[float] = None,
) -> Optional[DisplayWindow]:
    """
    Window [min * lower_factor, max * upper_factor].

    With lower_factor None the window starts at 0, which is how bar charts
    anchor their value axis.
    """
    vals = _finite(values)
    if not vals:
        return None
    w_max = max(vals) * upper_factor
    w_min = 0.0 if lower_factor is None else min(vals) * lower_factor
    if w_max < w_min:
        # negative values scale the "upper" end below the lower one
        w_min, w_max = w_max, w_min
    return DisplayWindow(min=w_min, max=w_max)


def to_percent(value: float, window: DisplayWindow) -> Optional[float]:
    """Position of value inside window, in percent of its width.

    Returns None for a degenerate window. Values outside the window map
    outside [0, 100]; see clip_percent.
    """
    if window.is_degenerate:
        logger.debug("degenerate window at %r, nothing to place", window.min)
        return None
    return (value - window.min) / window.span * 100.0


def clip_percent(percent: float) -> float:
    """Clamp a percent position to [0, 100] for fixed-width tracks."""
    return min(100.0, max(0.0, percent))
