"""Chart styling configuration.

Colors and stroke widths live in a ChartStyle passed to the figure builders.
The curve algorithms never see it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

from expcharts.plotting.theme import ThemeMode, resolve_theme
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChartStyle:
    """Visual constants for every experiment chart."""

    control_color: str = "#2d6d9a"
    control_fill: str = "#d3e5ef"
    treatment_color: str = "#0f7b0f"
    treatment_fill: str = "#dbeddb"
    worse_color: str = "#c4554d"      # treatment bar when the rate increased
    worse_fill: str = "#ffe2dd"
    counterfactual_color: str = "#9f6b2c"
    power_color: str = "#6940a5"
    power_fill: str = "#e8deee"
    reference_color: str = "#9b9b9b"
    line_width: float = 2.5
    reference_line_width: float = 1.5
    counterfactual_line_width: float = 2.0
    marker_size: int = 10
    fill_opacity: float = 0.4
    theme: ThemeMode = ThemeMode.LIGHT
    show_legend: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict."""
        d = asdict(self)
        d["theme"] = self.theme.value
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartStyle":
        """Build a ChartStyle from a dict, ignoring unknown keys.

        Raises:
            ValueError: If "theme" is not a recognized theme name.
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Unknown key '{key}' in chart style, ignoring")
                continue
            kwargs[key] = value
        if "theme" in kwargs:
            kwargs["theme"] = resolve_theme(kwargs["theme"])
        return cls(**kwargs)
