"""Value objects shared by the curve and layout algorithms.

Everything here is immutable and built fresh per computation call. None of
these objects carry state between calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


def is_missing(value: Any) -> bool:
    """True when a required scalar is absent, zero, or NaN.

    Mirrors the "nothing to draw" rule applied to form fields and service
    payloads: None, 0 and NaN all mean the value was not supplied.
    """
    if value is None:
        return True
    try:
        v = float(value)
    except (TypeError, ValueError):
        return True
    return v == 0 or math.isnan(v)


def is_valid_sample_size(value: Any) -> bool:
    """True when value is a finite number of at least one observation."""
    if value is None:
        return False
    try:
        v = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(v) and v >= 1


@dataclass(frozen=True)
class SummaryStat:
    """Aggregate description of one group: mean, size and optional std."""

    mean: float
    n: int
    std: Optional[float] = None

    def __post_init__(self) -> None:
        if not is_valid_sample_size(self.n):
            raise ValueError(f"SummaryStat.n must be >= 1, got {self.n}")
        if self.std is not None and self.std < 0:
            raise ValueError(f"SummaryStat.std must be >= 0, got {self.std}")

    @classmethod
    def proportion(cls, p: float, n: int) -> "SummaryStat":
        """Build a SummaryStat for a rate, deriving std = sqrt(p(1-p))."""
        return cls(mean=p, n=n, std=math.sqrt(max(p * (1.0 - p), 0.0)))

    @property
    def standard_error(self) -> Optional[float]:
        if self.std is None:
            return None
        return self.std / math.sqrt(self.n)


@dataclass(frozen=True)
class CurvePoint:
    """One sample of a curve: an x coordinate and named series values."""

    x: float
    series: Mapping[str, float] = field(default_factory=dict)

    def value(self, name: str) -> float:
        return self.series[name]


@dataclass(frozen=True)
class DisplayWindow:
    """Numeric range a chart axis or bar track is scaled to cover."""

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.max < self.min:
            raise ValueError(f"DisplayWindow max ({self.max}) < min ({self.min})")

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        """True when max == min; positions inside such a window are undefined."""
        return self.span == 0


@dataclass(frozen=True)
class BarSeriesRow:
    """One group in a bar comparison, with its confidence interval."""

    label: str
    value: float
    ci_low: float
    ci_high: float

    @property
    def has_interval(self) -> bool:
        return self.ci_low != self.value or self.ci_high != self.value


class Period(str, Enum):
    """Diff-in-difference observation period."""

    PRE = "pre"
    POST = "post"


@dataclass(frozen=True)
class TrendSeriesRow:
    """One period of a diff-in-difference trend chart.

    counterfactual is None for the pre-period.
    """

    period: Period
    observed: Mapping[str, float]
    counterfactual: Optional[float] = None
