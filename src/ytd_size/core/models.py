"""Domain models for ytd-size.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access and a few derived properties.  They carry
zero I/O and no dependencies on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

MediaKind = Literal["video", "audio"]

OutcomeStatus = Literal[
    "counted",
    "no_video",
    "no_audio",
    "invalid_size",
    "fetch_failed",
    "selection_failed",
]

AUDIO_QUALITY_ORDER: tuple[str, ...] = (
    "AUDIO_QUALITY_LOW",
    "AUDIO_QUALITY_MEDIUM",
    "AUDIO_QUALITY_HIGH",
)
"""Audio quality levels, worst to best."""


# ---------------------------------------------------------------------------
# Catalog entries
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoEntry:
    """One video listed on a channel tab."""

    video_id: str
    """YouTube video ID (e.g. ``dQw4w9WgXcQ``)."""

    title: str
    """Human-readable video title."""

    is_live: bool = False
    """Whether the video is currently streaming."""

    is_upcoming: bool = False
    """Whether the video is a scheduled premiere or stream."""

    @property
    def is_available(self) -> bool:
        """True when the video has a finished, fetchable stream."""
        return not (self.is_live or self.is_upcoming)


# ---------------------------------------------------------------------------
# Individual format descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FormatDescriptor:
    """One available encoding of a video's audio or video stream.

    A descriptor is video-only, audio-only or (rarely) muxed.  Every
    field except the media-kind flags is optional because the platform
    omits them freely.
    """

    itag: int | None = None
    """Legacy numeric format identifier."""

    mime_type: str | None = None
    """Container plus codec parameter, e.g. ``video/webm; codecs="vp9"``."""

    has_video: bool = False
    has_audio: bool = False

    bitrate: int | None = None
    """Average bitrate in bits per second."""

    approx_duration_ms: int | None = None
    """Duration covered by this format's byte stream."""

    content_length: int | None = None
    """Exact byte size when the platform reports it."""

    width: int | None = None
    height: int | None = None
    fps: int | None = None

    quality_label: str | None = None
    """Display label such as ``"1080p60"``."""

    quality: str | None = None
    """Coarse quality fallback (``"hd1080"``, ``"medium"`` …)."""

    audio_quality: str | None = None
    """One of :data:`AUDIO_QUALITY_ORDER`."""

    audio_sample_rate: int | None = None
    audio_channels: int | None = None

    @property
    def is_video_only(self) -> bool:
        return self.has_video and not self.has_audio

    @property
    def is_audio_only(self) -> bool:
        return self.has_audio and not self.has_video


@dataclass(frozen=True, slots=True)
class VideoFormats:
    """All format descriptors fetched for a single video."""

    video_id: str
    formats: tuple[FormatDescriptor, ...]

    def __len__(self) -> int:
        return len(self.formats)

    def __bool__(self) -> bool:
        return len(self.formats) > 0


# ---------------------------------------------------------------------------
# Sizing results
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoSizeOutcome:
    """The accumulator's verdict for one processed video."""

    video_id: str
    status: OutcomeStatus
    video_format: FormatDescriptor | None = None
    audio_format: FormatDescriptor | None = None
    video_size: float | None = None
    audio_size: float | None = None
    detail: str | None = None
    """Why the video was skipped, when the reason is not obvious from *status*."""

    @property
    def total_size(self) -> float | None:
        """Combined byte size, or ``None`` when a selection is missing."""
        if self.video_size is None or self.audio_size is None:
            return None
        return self.video_size + self.audio_size

    @property
    def counted(self) -> bool:
        return self.status == "counted"


@dataclass(frozen=True, slots=True)
class SizeReport:
    """Final aggregate over every processed video."""

    total_bytes: float
    counted: int
    unresolved: int
    invalid: int
    failed: int

    @property
    def total_gib(self) -> float:
        return self.total_bytes / 1024**3

    @property
    def processed(self) -> int:
        return self.counted + self.unresolved + self.invalid + self.failed
