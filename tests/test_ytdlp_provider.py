"""Tests for the yt-dlp provider (infra/ytdlp_provider.py).

yt-dlp itself is replaced by a fake module object returned from
``_import_ytdlp``, so these tests run offline and do not require
yt-dlp to be installed.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from ytd_size.exceptions import MetadataExtractionError, VideoUnavailableError
from ytd_size.infra import ytdlp_provider
from ytd_size.infra.ytdlp_provider import YtDlpCatalogProvider


class _FakeDownloadError(Exception):
    pass


def _install_fake_ytdlp(
    monkeypatch: pytest.MonkeyPatch,
    *,
    result: Any = None,
    error: Exception | None = None,
) -> MagicMock:
    """Make ``_import_ytdlp`` return a fake module; return the YoutubeDL mock."""
    ydl = MagicMock()
    if error is not None:
        ydl.extract_info.side_effect = error
    else:
        ydl.extract_info.return_value = result

    youtube_dl_cls = MagicMock()
    youtube_dl_cls.return_value.__enter__.return_value = ydl
    youtube_dl_cls.return_value.__exit__.return_value = False

    fake = SimpleNamespace(
        YoutubeDL=youtube_dl_cls,
        utils=SimpleNamespace(DownloadError=_FakeDownloadError),
    )
    monkeypatch.setattr(ytdlp_provider, "_import_ytdlp", lambda: fake)
    return youtube_dl_cls


# ---------------------------------------------------------------------------
# fetch_info
# ---------------------------------------------------------------------------

class TestFetchInfo:
    def test_returns_copy_of_info(self, monkeypatch: pytest.MonkeyPatch) -> None:
        info = {"id": "abc", "formats": []}
        _install_fake_ytdlp(monkeypatch, result=info)

        result = YtDlpCatalogProvider().fetch_info("https://www.youtube.com/watch?v=abc")

        assert result == info
        assert result is not info

    def test_never_downloads(self, monkeypatch: pytest.MonkeyPatch) -> None:
        cls = _install_fake_ytdlp(monkeypatch, result={"id": "abc"})
        YtDlpCatalogProvider().fetch_info("https://www.youtube.com/watch?v=abc")

        opts = cls.call_args.args[0]
        assert opts["skip_download"] is True
        assert opts["quiet"] is True
        assert "extract_flat" not in opts
        ydl = cls.return_value.__enter__.return_value
        ydl.extract_info.assert_called_once_with(
            "https://www.youtube.com/watch?v=abc", download=False,
        )

    def test_none_result_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, result=None)
        with pytest.raises(MetadataExtractionError, match="no metadata"):
            YtDlpCatalogProvider().fetch_info("https://www.youtube.com/watch?v=abc")

    def test_non_dict_result_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, result=["not", "a", "dict"])
        with pytest.raises(MetadataExtractionError, match="unexpected data structure"):
            YtDlpCatalogProvider().fetch_info("https://www.youtube.com/watch?v=abc")


# ---------------------------------------------------------------------------
# list_entries
# ---------------------------------------------------------------------------

class TestListEntries:
    def test_uses_flat_extraction(self, monkeypatch: pytest.MonkeyPatch) -> None:
        cls = _install_fake_ytdlp(
            monkeypatch,
            result={"entries": [{"id": "a"}, {"id": "b"}, None]},
        )
        entries = YtDlpCatalogProvider().list_entries(
            "https://www.youtube.com/@someone/streams",
        )

        assert entries == [{"id": "a"}, {"id": "b"}]
        assert cls.call_args.args[0]["extract_flat"] == "in_playlist"

    def test_accepts_generator_entries(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(
            monkeypatch,
            result={"entries": (e for e in [{"id": "a"}])},
        )
        assert YtDlpCatalogProvider().list_entries("u") == [{"id": "a"}]

    def test_missing_entries_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, result={"id": "channel"})
        with pytest.raises(MetadataExtractionError, match="No video list") as exc_info:
            YtDlpCatalogProvider().list_entries("https://www.youtube.com/@x/shorts")
        assert exc_info.value.hint is not None


# ---------------------------------------------------------------------------
# Exception mapping
# ---------------------------------------------------------------------------

class TestErrorMapping:
    @pytest.mark.parametrize(
        "message",
        [
            "ERROR: [youtube] abc: Video unavailable",
            "ERROR: [youtube] abc: Private video. Sign in if you've been granted access",
            "ERROR: [youtube] abc: Join this channel to get access to members-only content",
        ],
    )
    def test_unavailable_signals(
        self, monkeypatch: pytest.MonkeyPatch, message: str,
    ) -> None:
        _install_fake_ytdlp(monkeypatch, error=_FakeDownloadError(message))
        with pytest.raises(VideoUnavailableError) as exc_info:
            YtDlpCatalogProvider().fetch_info("https://www.youtube.com/watch?v=abc")
        assert isinstance(exc_info.value.__cause__, _FakeDownloadError)

    def test_other_download_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(
            monkeypatch,
            error=_FakeDownloadError("ERROR: Unable to download webpage: HTTP 429"),
        )
        with pytest.raises(MetadataExtractionError, match="HTTP 429") as exc_info:
            YtDlpCatalogProvider().fetch_info("https://www.youtube.com/watch?v=abc")
        assert not isinstance(exc_info.value, VideoUnavailableError)
        assert "pip install --upgrade yt-dlp" in (exc_info.value.hint or "")

    def test_unexpected_exception(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _install_fake_ytdlp(monkeypatch, error=KeyError("formats"))
        with pytest.raises(MetadataExtractionError, match="Unexpected yt-dlp error"):
            YtDlpCatalogProvider().fetch_info("https://www.youtube.com/watch?v=abc")
