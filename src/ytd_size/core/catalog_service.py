"""Core catalog service — enumerates a channel and sizes its videos.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~ytd_size.core.protocols.CatalogProvider` and a
:class:`~ytd_size.core.protocols.FormatSelector`, both injected at
construction time, keeping the core free of any external-system
imports.

Guarantees
----------
* No ``print()``, no filesystem access; network access only through the
  provider.
* Only :class:`~ytd_size.exceptions.YtdSizeError` subclasses escape
  :meth:`CatalogService.list_available_videos` and
  :meth:`CatalogService.fetch_formats`.
* Per-video metadata is fetched by a bounded thread pool; results are
  folded into the :class:`SizeAccumulator` one at a time on the calling
  thread.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Generator, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from ytd_size.config import CHANNEL_TABS, DEFAULT_CONCURRENCY, DEFAULT_TAB
from ytd_size.core.accumulator import SizeAccumulator
from ytd_size.core.models import (
    FormatDescriptor,
    SizeReport,
    VideoEntry,
    VideoFormats,
    VideoSizeOutcome,
)
from ytd_size.core.protocols import CatalogProvider, FormatSelector
from ytd_size.core.selection import DefaultSelector
from ytd_size.exceptions import (
    InvalidChannelError,
    MetadataExtractionError,
    SelectorPluginError,
    YtdSizeError,
)

logger = logging.getLogger(__name__)

_YOUTUBE = "https://www.youtube.com"
_CHANNEL_ID_RE = re.compile(r"^UC[\w-]{22}$")
_ITAG_RE = re.compile(r"^(\d+)")
_QUALITY_LABEL_RE = re.compile(r"^\d+p")
_LABEL_SPLIT_RE = re.compile(r"[\s,]+")
_AUDIO_QUALITY_WORDS: tuple[str, ...] = ("ultralow", "low", "medium", "high")

OutcomeCallback = Callable[[VideoSizeOutcome], None]


class CatalogService:
    """Channel enumeration, format retrieval and size estimation.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`CatalogProvider` protocol.
    selector:
        Format selection strategy.  Defaults to the built-in ranking.
    max_workers:
        Upper bound on concurrent metadata fetches.
    """

    def __init__(
        self,
        provider: CatalogProvider,
        selector: FormatSelector | None = None,
        *,
        max_workers: int = DEFAULT_CONCURRENCY,
    ) -> None:
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._provider: CatalogProvider = provider
        self._selector: FormatSelector = selector or DefaultSelector()
        self._max_workers: int = max_workers

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_available_videos(
        self,
        channel: str,
        tab: str = DEFAULT_TAB,
    ) -> list[VideoEntry]:
        """List the channel tab, dropping live and upcoming videos.

        Raises
        ------
        InvalidChannelError
            If *channel* is empty or *tab* is unknown.
        MetadataExtractionError
            If the backend fails to list the channel.
        """
        url = self.channel_url(channel, tab)
        raw_entries = self._call(self._provider.list_entries, url)
        entries = [self._parse_entry(raw) for raw in raw_entries if isinstance(raw, dict)]
        entries = [entry for entry in entries if entry.video_id]
        available = [entry for entry in entries if entry.is_available]
        logger.info(
            "Listed %d videos on %s, %d available",
            len(entries), url, len(available),
        )
        return available

    def fetch_formats(self, video_id: str) -> VideoFormats:
        """Fetch and parse every format descriptor of one video.

        Raises
        ------
        MetadataExtractionError
            If the backend fails to return metadata.
        VideoUnavailableError
            If the video is confirmed unavailable.
        """
        logger.debug("Fetching formats for %s", video_id)
        info = self._call(self._provider.fetch_info, self.video_url(video_id))
        raw_formats = self._extract_raw_formats(info)
        duration_ms = self._duration_ms(info)
        formats = tuple(
            self._parse_single_format(raw, duration_ms) for raw in raw_formats
        )
        return VideoFormats(video_id=video_id, formats=formats)

    def iter_video_formats(
        self,
        video_ids: Iterable[str],
    ) -> Generator[tuple[str, VideoFormats | YtdSizeError], None, None]:
        """Fetch formats concurrently, yielding in completion order.

        A failed fetch is yielded as its :class:`YtdSizeError` instead of
        being raised, so one bad video does not end the run.  When the
        consumer stops early (generator closed, ``KeyboardInterrupt``),
        fetches that have not started yet are cancelled.
        """
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            try:
                futures = {
                    pool.submit(self.fetch_formats, video_id): video_id
                    for video_id in video_ids
                }
                for future in as_completed(futures):
                    video_id = futures[future]
                    result: VideoFormats | YtdSizeError
                    try:
                        result = future.result()
                    except YtdSizeError as exc:
                        logger.warning("Could not fetch %s: %s", video_id, exc)
                        result = exc
                    yield video_id, result
            finally:
                pool.shutdown(wait=False, cancel_futures=True)

    def estimate(
        self,
        video_ids: Iterable[str],
        on_outcome: OutcomeCallback | None = None,
    ) -> SizeReport:
        """Select formats for every video and sum their estimated sizes.

        *on_outcome* is invoked once per video, on the calling thread, as
        soon as that video has been folded into the total.  A selector
        plugin failure is recorded against that video and the run goes on.
        """
        accumulator = SizeAccumulator()
        results = self.iter_video_formats(video_ids)
        try:
            for video_id, result in results:
                if isinstance(result, YtdSizeError):
                    outcome = accumulator.record_failure(video_id, str(result))
                else:
                    outcome = self._select_and_add(accumulator, video_id, result)
                logger.debug("%s: %s", video_id, outcome.status)
                if on_outcome is not None:
                    on_outcome(outcome)
        finally:
            results.close()
        report = accumulator.report()
        logger.info(
            "Sized %d of %d videos: %.0f bytes",
            report.counted, report.processed, report.total_bytes,
        )
        return report

    def estimate_channel(
        self,
        channel: str,
        tab: str = DEFAULT_TAB,
        on_outcome: OutcomeCallback | None = None,
    ) -> SizeReport:
        """List *channel* and :meth:`estimate` every available video."""
        videos = self.list_available_videos(channel, tab)
        return self.estimate((video.video_id for video in videos), on_outcome)

    def _select_and_add(
        self,
        accumulator: SizeAccumulator,
        video_id: str,
        formats: VideoFormats,
    ) -> VideoSizeOutcome:
        try:
            video_format = self._selector.select_video(formats.formats)
            audio_format = self._selector.select_audio(formats.formats)
        except SelectorPluginError as exc:
            logger.warning("Could not select formats for %s: %s", video_id, exc)
            return accumulator.record_failure(
                video_id, str(exc), status="selection_failed",
            )
        return accumulator.add(video_id, video_format, audio_format)

    # ------------------------------------------------------------------
    # URL construction
    # ------------------------------------------------------------------

    @staticmethod
    def channel_url(channel: str, tab: str = DEFAULT_TAB) -> str:
        """Build the URL of a channel tab.

        Accepts a full channel URL, an ``@handle``, a ``UC…`` channel id,
        or a bare handle without the ``@``.
        """
        if tab not in CHANNEL_TABS:
            raise InvalidChannelError(
                f"Unknown channel tab: {tab}",
                hint=f"Choose one of: {', '.join(CHANNEL_TABS)}",
            )
        stripped = channel.strip().rstrip("/")
        if not stripped:
            raise InvalidChannelError("Channel must not be empty.")

        if stripped.startswith(("http://", "https://")):
            if stripped.rsplit("/", 1)[-1] in CHANNEL_TABS:
                return stripped
            return f"{stripped}/{tab}"
        if stripped.startswith("@"):
            return f"{_YOUTUBE}/{stripped}/{tab}"
        if _CHANNEL_ID_RE.match(stripped):
            return f"{_YOUTUBE}/channel/{stripped}/{tab}"
        if "/" in stripped or " " in stripped:
            raise InvalidChannelError(
                f"Invalid channel: {stripped}",
                hint="Pass a channel URL, an @handle or a UC… channel id.",
            )
        return f"{_YOUTUBE}/@{stripped}/{tab}"

    @staticmethod
    def video_url(video_id: str) -> str:
        return f"{_YOUTUBE}/watch?v={video_id}"

    # ------------------------------------------------------------------
    # Provider delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(method: Callable[[str], Any], url: str) -> Any:
        """Call the provider and ensure only our exceptions escape."""
        try:
            return method(url)
        except YtdSizeError:
            # Already one of ours; propagate unchanged.
            raise
        except Exception as exc:
            raise MetadataExtractionError(
                f"Unexpected provider error: {exc}",
            ) from exc

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def _parse_entry(raw: dict[str, Any]) -> VideoEntry:
        """Convert a flat playlist entry into a :class:`VideoEntry`."""
        live_status = raw.get("live_status")
        return VideoEntry(
            video_id=str(raw.get("id") or ""),
            title=str(raw.get("title") or "Unknown"),
            is_live=live_status == "is_live" or raw.get("is_live") is True,
            is_upcoming=live_status == "is_upcoming" or raw.get("is_upcoming") is True,
        )

    @staticmethod
    def _extract_raw_formats(info: dict[str, Any]) -> list[dict[str, Any]]:
        """Safely pull the ``formats`` list from a raw info dict."""
        raw: object = info.get("formats")
        if not isinstance(raw, list):
            return []
        # Each element is expected to be a dict; skip malformed entries.
        return [entry for entry in raw if isinstance(entry, dict)]

    @staticmethod
    def _duration_ms(info: dict[str, Any]) -> int | None:
        duration = info.get("duration")
        if not isinstance(duration, (int, float)) or isinstance(duration, bool):
            return None
        return round(duration * 1000)

    @classmethod
    def _parse_single_format(
        cls,
        raw: dict[str, Any],
        duration_ms: int | None,
    ) -> FormatDescriptor:
        """Convert one yt-dlp format dict to a :class:`FormatDescriptor`."""
        vcodec = _codec_or_none(raw.get("vcodec"))
        acodec = _codec_or_none(raw.get("acodec"))
        has_video = _has_stream(raw.get("vcodec"), raw.get("height") is not None)
        has_audio = _has_stream(
            raw.get("acodec"),
            raw.get("asr") is not None or raw.get("audio_channels") is not None,
        )

        itag_match = _ITAG_RE.match(str(raw.get("format_id") or ""))
        note = str(raw.get("format_note") or "").strip()
        label = _LABEL_SPLIT_RE.split(note)[0] if _QUALITY_LABEL_RE.match(note) else None

        return FormatDescriptor(
            itag=int(itag_match.group(1)) if itag_match else None,
            mime_type=_build_mime_type(
                raw.get("ext"),
                vcodec if has_video else None,
                acodec if has_audio else None,
                has_video,
            ),
            has_video=has_video,
            has_audio=has_audio,
            bitrate=_kbps_to_bps(raw.get("tbr") or raw.get("vbr") or raw.get("abr")),
            approx_duration_ms=duration_ms,
            content_length=_int_or_none(raw.get("filesize")),
            width=_int_or_none(raw.get("width")),
            height=_int_or_none(raw.get("height")),
            fps=_int_or_none(raw.get("fps")),
            quality_label=label,
            quality=note or None,
            audio_quality=_audio_quality(note) if has_audio and not has_video else None,
            audio_sample_rate=_int_or_none(raw.get("asr")),
            audio_channels=_int_or_none(raw.get("audio_channels")),
        )


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _codec_or_none(value: object) -> str | None:
    if not isinstance(value, str) or value in ("", "none"):
        return None
    return value


def _has_stream(codec: object, fallback: bool) -> bool:
    """yt-dlp uses ``"none"`` for an absent stream and ``None`` for unknown."""
    if codec == "none":
        return False
    if codec is None:
        return fallback
    return True


def _int_or_none(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return round(float(value))  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None


def _kbps_to_bps(value: object) -> int | None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    return round(value * 1000)


def _build_mime_type(
    ext: object,
    vcodec: str | None,
    acodec: str | None,
    has_video: bool,
) -> str | None:
    """Rebuild a ``type/subtype; codecs="…"`` string from yt-dlp fields."""
    if not isinstance(ext, str) or not ext:
        return None
    kind = "video" if has_video else "audio"
    subtype = "mp4" if ext in ("m4a", "m4v") else ext
    codecs = ", ".join(codec for codec in (vcodec, acodec) if codec)
    if not codecs:
        return f"{kind}/{subtype}"
    return f'{kind}/{subtype}; codecs="{codecs}"'


def _audio_quality(note: str) -> str | None:
    """Map yt-dlp's audio ``format_note`` (``"medium, DRC"``) to the enum name."""
    for token in re.split(r"[\s,]+", note.lower()):
        if token in _AUDIO_QUALITY_WORDS:
            return f"AUDIO_QUALITY_{token.upper()}"
    return None
