"""Tests for settings loading and the colour theme."""

from __future__ import annotations

import json
from pathlib import Path

from rich.color import Color

from settings import DEFAULT_THEME, Settings


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults_without_file(tmp_path: Path) -> None:
    s = Settings(tmp_path / "missing.json")
    assert s.get("package_manager") == "pacman"
    assert s.get("dependency_query") == "-Qdt"
    assert s.get_timeout() == 30.0
    assert s.get("theme") == DEFAULT_THEME


def test_user_values_override_defaults(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "settings.json", {"command_timeout": 0, "theme": {"orphan_bg": "red"}})
    s = Settings(cfg)
    assert s.get_timeout() is None
    assert s.get("theme")["orphan_bg"] == "red"
    assert s.get("theme")["foreign_bg"] == DEFAULT_THEME["foreign_bg"]
    assert s.get_theme().orphan.bgcolor == Color.parse("red")


def test_broken_file_falls_back(tmp_path: Path) -> None:
    cfg = tmp_path / "settings.json"
    cfg.write_text("{not json", encoding="utf-8")
    s = Settings(cfg)
    assert s.get("package_manager") == "pacman"


def test_invalid_colour_uses_default_theme(tmp_path: Path) -> None:
    cfg = _write(tmp_path / "settings.json", {"theme": {"fg": "not-a-colour"}})
    theme = Settings(cfg).get_theme()
    assert theme.base.color == Color.parse(DEFAULT_THEME["fg"])


def test_session_override_is_not_written(tmp_path: Path) -> None:
    cfg = tmp_path / "settings.json"
    s = Settings(cfg)
    s.set("package_manager", "/opt/bin/pacman")
    assert s.get("package_manager") == "/opt/bin/pacman"
    assert not cfg.exists()
