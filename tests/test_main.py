"""Tests for startup error reporting and detail formatting."""

from __future__ import annotations

import pytest

import main
from models import DetailRecord
from providers import CatalogBuildError, PackageProvider
from runner import ExecutionError
from tui import format_details


def test_catalog_failure_exits_with_error(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    def failing_build(self):
        cause = ExecutionError(["pacman", "-Qe"], "not-found")
        raise CatalogBuildError(f"Could not list installed packages: {cause}") from cause

    monkeypatch.setattr(PackageProvider, "build_catalog", failing_build)
    monkeypatch.setattr(main.PackagesApp, "run", lambda self: pytest.fail("app must not start"))

    assert main.main([]) == 1
    err = capsys.readouterr().err
    assert "Could not list installed packages" in err
    assert "ExecutionError" in err


def test_format_details_lists_fields() -> None:
    details = DetailRecord(
        name="foo",
        version="1.0",
        depends_on=["glibc  zlib"],
        required_by=["bar", "baz"],
    )
    text = format_details(details).plain
    assert text.startswith("foo Details")
    assert "Version: 1.0" in text
    assert "Depends On: glibc  zlib" in text
    assert "Required By: bar, baz" in text
    assert "Optional For: None" in text
