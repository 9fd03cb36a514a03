"""
Chart style persistence (platformdirs + JSON).

Persisted items (schema v1):
- style: ChartStyle dict representation

Behavior:
- If config file missing or unreadable -> defaults are used
- If schema_version mismatches:
  - default: reset to defaults
  - optional: keep loaded but update version
- Unknown keys in loaded JSON are ignored with warnings
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from platformdirs import user_config_dir

from expcharts.plotting.chart_style import ChartStyle
from expcharts.utils.logging import get_logger

logger = get_logger(__name__)

# Increment when you make a breaking change to the on-disk JSON schema.
SCHEMA_VERSION: int = 1


@dataclass
class ChartStyleConfigData:
    """JSON-serializable config payload."""

    schema_version: int = SCHEMA_VERSION
    style: Dict[str, Any] = field(default_factory=lambda: ChartStyle().to_dict())

    def to_json_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "style": self.style,
        }

    @classmethod
    def from_json_dict(cls, d: Dict[str, Any]) -> "ChartStyleConfigData":
        """
        Tolerant loader:
        - ignores unknown keys
        - tolerates a missing or malformed style (defaults used)
        """
        schema_version = int(d.get("schema_version", -1))

        style = ChartStyle().to_dict()
        style_raw = d.get("style", {})
        if isinstance(style_raw, dict):
            style.update(style_raw)
        else:
            logger.warning("style is not a dict, using default style")

        known_keys = {"schema_version", "style"}
        for key in d.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in chart style config, ignoring")

        return cls(schema_version=schema_version, style=style)


class ChartStyleConfig:
    """
    Manager for loading/saving ChartStyleConfigData to disk.
    """

    def __init__(self, *, path: Path, data: Optional[ChartStyleConfigData] = None):
        self.path = path
        self.data = data if data is not None else ChartStyleConfigData()

    @staticmethod
    def default_config_path(
        app_name: str = "expcharts",
        filename: str = "chart_style.json",
        app_author: str | None = None,
    ) -> Path:
        """
        Determine OS-appropriate per-user config path.

        macOS:   ~/Library/Application Support/expcharts/chart_style.json
        Linux:   ~/.config/expcharts/chart_style.json
        Windows: %APPDATA%\\expcharts\\chart_style.json
        """
        d = Path(user_config_dir(app_name, app_author))
        d.mkdir(parents=True, exist_ok=True)
        return d / filename

    @classmethod
    def load(
        cls,
        *,
        config_path: Optional[Path] = None,
        app_name: str = "expcharts",
        filename: str = "chart_style.json",
        app_author: str | None = None,
        schema_version: int = SCHEMA_VERSION,
        reset_on_version_mismatch: bool = True,
        create_if_missing: bool = False,
    ) -> "ChartStyleConfig":
        """
        Load config from disk.

        If file doesn't exist or is unreadable -> defaults.
        If schema mismatch:
          - reset_on_version_mismatch=True -> defaults
          - else -> keep loaded but overwrite schema_version

        If create_if_missing=True and file is missing -> immediately write defaults.
        """
        path = config_path or cls.default_config_path(
            app_name=app_name, filename=filename, app_author=app_author
        )
        default_data = ChartStyleConfigData(schema_version=schema_version)

        try:
            raw = path.read_text(encoding="utf-8")
            parsed = json.loads(raw)
            if not isinstance(parsed, dict):
                logger.warning(f"Chart style config at {path} does not contain a dict, using defaults")
                return cls(path=path, data=default_data)

            loaded = ChartStyleConfigData.from_json_dict(parsed)

            if int(loaded.schema_version) != int(schema_version):
                if reset_on_version_mismatch:
                    logger.warning(
                        f"Chart style config schema version mismatch: loaded={loaded.schema_version}, "
                        f"expected={schema_version}, resetting to defaults"
                    )
                    cfg = cls(path=path, data=default_data)
                    if create_if_missing:
                        cfg.save()
                    return cfg
                loaded.schema_version = int(schema_version)

            return cls(path=path, data=loaded)
        except FileNotFoundError:
            logger.debug(f"Chart style config not found at {path}, using defaults")
            cfg = cls(path=path, data=default_data)
            if create_if_missing:
                cfg.save()
            return cfg
        except json.JSONDecodeError as e:
            logger.warning(f"Chart style config at {path} is not valid JSON: {e}, using defaults")
            return cls(path=path, data=default_data)
        except Exception as e:
            logger.warning(f"Error loading chart style config from {path}: {e}, using defaults")
            return cls(path=path, data=default_data)

    def save(self) -> None:
        """Write config to disk."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            json_str = json.dumps(self.data.to_json_dict(), indent=2)
            self.path.write_text(json_str, encoding="utf-8")
            logger.info(f"Saved chart style config to {self.path}")
        except OSError as e:
            logger.error(f"Error saving chart style config to {self.path}: {e}")
            raise

    def get_style(self) -> ChartStyle:
        """ChartStyle from config; defaults when the stored style is invalid."""
        try:
            return ChartStyle.from_dict(self.data.style)
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid chart style in config: {e}, using defaults")
            return ChartStyle()

    def set_style(self, style: ChartStyle) -> None:
        self.data.style = style.to_dict()
