"""yt-dlp backed implementation of :class:`~ytd_size.core.protocols.CatalogProvider`.

This module is the **only** place in the codebase that imports ``yt_dlp``.
All yt-dlp exceptions are caught here and re-raised as typed
:class:`~ytd_size.exceptions.YtdSizeError` subclasses — nothing raw
escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any

from ytd_size.exceptions import (
    EnvironmentError,
    MetadataExtractionError,
    VideoUnavailableError,
    append_ytdlp_upgrade_suggestion,
)

logger = logging.getLogger(__name__)


def _import_ytdlp() -> Any:
    """Import yt-dlp lazily so ``--help`` works without it."""
    try:
        import yt_dlp
        import yt_dlp.utils
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "yt-dlp is not installed. Install with: pip install yt-dlp",
        ) from exc
    return yt_dlp


class YtDlpCatalogProvider:
    """Concrete :class:`CatalogProvider` backed by the yt-dlp Python API.

    Usage::

        provider = YtDlpCatalogProvider()
        entries = provider.list_entries("https://www.youtube.com/@handle/streams")
        info = provider.fetch_info("https://www.youtube.com/watch?v=...")

    A fresh ``YoutubeDL`` is created per call, so one provider can be
    shared by the worker threads of the catalog service.
    """

    # Substrings in yt-dlp error messages that indicate the video itself
    # is unavailable (as opposed to a transient or extraction error).
    _UNAVAILABLE_SIGNALS: tuple[str, ...] = (
        "unavailable",
        "private video",
        "removed",
        "not available",
        "account terminated",
        "video has been removed",
        "this video is no longer available",
        "sign in to confirm your age",
        "members-only",
        "join this channel",
    )

    @staticmethod
    def _base_opts() -> dict[str, Any]:
        return {
            "quiet": True,
            "no_warnings": True,
            "no_color": True,
            # Metadata only; never write media to disk.
            "skip_download": True,
        }

    @classmethod
    def _listing_opts(cls) -> dict[str, Any]:
        """Options for enumerating a channel tab without per-video requests."""
        opts = cls._base_opts()
        opts["extract_flat"] = "in_playlist"
        return opts

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_entries(self, channel_url: str) -> list[dict[str, Any]]:
        """Return the flat entries of a channel tab.

        yt-dlp follows the tab's continuation pages itself.

        Raises
        ------
        MetadataExtractionError
            When the listing fails or returns an unexpected structure.
        """
        info = self._extract(channel_url, self._listing_opts())
        raw_entries = info.get("entries")
        if raw_entries is None:
            raise MetadataExtractionError(
                f"No video list found at {channel_url}.",
                hint="The channel may not have this tab.",
            )
        entries = [dict(entry) for entry in raw_entries if isinstance(entry, dict)]
        logger.debug("yt-dlp listed %d entries at %s", len(entries), channel_url)
        return entries

    def fetch_info(self, video_url: str) -> dict[str, Any]:
        """Extract metadata for *video_url* without downloading.

        Raises
        ------
        VideoUnavailableError
            When yt-dlp reports the video as unavailable / private / removed.
        MetadataExtractionError
            For all other extraction failures.
        """
        return self._extract(video_url, self._base_opts())

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def _extract(self, url: str, opts: dict[str, Any]) -> dict[str, Any]:
        yt_dlp = _import_ytdlp()

        try:
            with yt_dlp.YoutubeDL(opts) as ydl:
                info: Any = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as exc:
            self._raise_mapped(exc)
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected yt-dlp error: {exc}",
                hint=append_ytdlp_upgrade_suggestion("Retry later."),
            ) from exc

        if info is None:
            raise MetadataExtractionError(
                f"yt-dlp returned no metadata for {url}.",
                hint="The URL may not point to a valid channel or video.",
            )

        if not isinstance(info, dict):
            raise MetadataExtractionError(
                "yt-dlp returned an unexpected data structure.",
            )

        return dict(info)  # shallow copy, detached from yt-dlp internals

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @classmethod
    def _raise_mapped(cls, exc: Exception) -> None:
        """Translate a yt-dlp ``DownloadError`` into a domain exception.

        Always raises.
        """
        msg_lower = str(exc).lower()
        if any(signal in msg_lower for signal in cls._UNAVAILABLE_SIGNALS):
            raise VideoUnavailableError(
                str(exc),
                hint="The video may be private, removed, or members-only.",
            ) from exc
        raise MetadataExtractionError(
            str(exc),
            hint=append_ytdlp_upgrade_suggestion("Check the channel or video URL."),
        ) from exc
