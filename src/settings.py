import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.color import Color, ColorParseError
from rich.style import Style

log = logging.getLogger(__name__)

# Catppuccin Mocha
DEFAULT_THEME = {
    "fg": "#cdd6f4",           # text
    "bg": "#1e1e2e",           # base
    "orphan_fg": "#11111b",    # crust
    "orphan_bg": "#f38ba8",    # red
    "foreign_fg": "#11111b",
    "foreign_bg": "#f9e2af",   # yellow
    "selected_fg": "#11111b",
    "selected_bg": "#f5e0dc",  # rosewater
}


class Settings:
    """Read-only settings with sensible defaults."""

    DEFAULTS = {
        "package_manager": "pacman",
        "command_timeout": 30,
        # "-Qdt" lists orphans only, "-Qd" every package installed as a dependency
        "dependency_query": "-Qdt",
        "log_level": "WARNING",
        "theme": dict(DEFAULT_THEME),
    }

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file or Path.home() / ".config" / "pacbrowse" / "settings.json"
        self._data: Dict[str, Any] = {}
        self.load()

    def load(self):
        """Load settings from file and fall back to defaults."""
        self._data = dict(self.DEFAULTS)
        self._data["theme"] = dict(DEFAULT_THEME)

        if not self.config_file.exists():
            return
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                user_data = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("Could not load settings from %s: %s", self.config_file, e)
            return
        if not isinstance(user_data, dict):
            log.warning("Ignoring %s: expected a JSON object", self.config_file)
            return

        theme = user_data.pop("theme", None)
        self._data.update(user_data)
        if isinstance(theme, dict):
            self._data["theme"].update(theme)

    def get(self, key: str, default=None) -> Any:
        """Retrieve a setting value."""
        return self._data.get(key, default)

    def set(self, key: str, value: Any):
        """Override a setting for this session only."""
        self._data[key] = value

    # ---- Convenience methods ----

    def get_timeout(self) -> Optional[float]:
        value = self.get("command_timeout")
        if value in (None, 0):
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            log.warning("Invalid command_timeout %r, using default", value)
            return float(self.DEFAULTS["command_timeout"])

    def get_theme(self) -> "Theme":
        """Return the parsed theme, or the default palette if any colour is invalid."""
        try:
            return Theme.from_dict(self.get("theme") or {})
        except ColorParseError as e:
            log.warning("Invalid theme colour (%s), using the default theme", e)
            return Theme.from_dict(DEFAULT_THEME)


class Theme:
    def __init__(self, colors: Dict[str, Color]):
        self.colors = colors

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "Theme":
        merged = dict(DEFAULT_THEME)
        merged.update(data)
        return cls({key: Color.parse(str(merged[key])) for key in DEFAULT_THEME})

    def _style(self, prefix: str) -> Style:
        return Style(color=self.colors[f"{prefix}_fg"], bgcolor=self.colors[f"{prefix}_bg"])

    @property
    def base(self) -> Style:
        return Style(color=self.colors["fg"], bgcolor=self.colors["bg"])

    @property
    def orphan(self) -> Style:
        return self._style("orphan")

    @property
    def foreign(self) -> Style:
        return self._style("foreign")

    @property
    def selected(self) -> Style:
        return self._style("selected")


# Global instance
settings = Settings()
