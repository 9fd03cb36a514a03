"""Theme utilities for Plotly charts."""

from __future__ import annotations

from enum import Enum
from typing import Union


class ThemeMode(str, Enum):
    """UI theme mode.

    Used by figure builders to coordinate background, text and grid colors.
    """

    DARK = "dark"
    LIGHT = "light"


_DARK_NAMES = frozenset({"dark", "plotly_dark"})
_LIGHT_NAMES = frozenset({"light", "plotly_white", "plotly"})


def resolve_theme(theme: Union[str, ThemeMode, None]) -> ThemeMode:
    """Convert str to ThemeMode. None means LIGHT.

    Plotly template names ("plotly_dark", "plotly_white", "plotly") are
    accepted alongside the ThemeMode values.

    Raises:
        ValueError: If theme is not a recognized name.
    """
    if isinstance(theme, ThemeMode):
        return theme
    if theme is None:
        return ThemeMode.LIGHT
    s = str(theme).strip().lower()
    if s in _DARK_NAMES:
        return ThemeMode.DARK
    if s in _LIGHT_NAMES:
        return ThemeMode.LIGHT
    raise ValueError(f"Unknown theme '{theme}'")


def get_theme_colors(theme: ThemeMode) -> tuple[str, str]:
    """Get background and foreground colors for a theme."""
    if theme is ThemeMode.DARK:
        return "#191919", "#ffffff"
    return "#ffffff", "#37352f"


def get_theme_template(theme: ThemeMode) -> str:
    """Get Plotly template name for a theme."""
    if theme is ThemeMode.DARK:
        return "plotly_dark"
    return "plotly_white"


def get_grid_color(theme: ThemeMode) -> str:
    if theme is ThemeMode.DARK:
        return "rgba(255,255,255,0.2)"
    return "rgba(55,53,47,0.09)"
