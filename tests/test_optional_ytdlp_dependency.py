"""Regression tests for optional yt-dlp dependency boundaries.

These tests ensure CLI paths that do not require yt-dlp still work when
yt-dlp is absent, while listing/extraction paths fail cleanly with a
typed environment error.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from ytd_size.cli import exit_codes
from ytd_size.cli.app import main
from ytd_size.exceptions import EnvironmentError
from ytd_size.infra.ytdlp_provider import YtDlpCatalogProvider


def _remove_ytdlp(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "yt_dlp", None)
    monkeypatch.setitem(sys.modules, "yt_dlp.utils", None)


def test_help_works_without_ytdlp(monkeypatch: pytest.MonkeyPatch) -> None:
    _remove_ytdlp(monkeypatch)
    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_ytdlp(monkeypatch: pytest.MonkeyPatch) -> None:
    _remove_ytdlp(monkeypatch)
    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_init_selector_works_without_ytdlp(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path,
) -> None:
    _remove_ytdlp(monkeypatch)
    code = main(["--init-selector", str(tmp_path / "sel.py")])
    assert code == exit_codes.SUCCESS


def test_fetch_info_raises_environment_error_without_ytdlp(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _remove_ytdlp(monkeypatch)
    provider = YtDlpCatalogProvider()

    with pytest.raises(EnvironmentError, match="yt-dlp is not installed"):
        provider.fetch_info("https://www.youtube.com/watch?v=dQw4w9WgXcQ")


def test_list_entries_raises_environment_error_without_ytdlp(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _remove_ytdlp(monkeypatch)
    provider = YtDlpCatalogProvider()

    with pytest.raises(EnvironmentError, match="yt-dlp is not installed"):
        provider.list_entries("https://www.youtube.com/@someone/streams")


def test_estimate_raises_environment_error_without_ytdlp(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _remove_ytdlp(monkeypatch)
    with pytest.raises(EnvironmentError, match="yt-dlp is not installed"):
        main(["@someone"])
