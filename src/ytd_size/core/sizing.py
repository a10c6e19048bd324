"""Byte-size estimation and display strings for selected formats.

:func:`estimate_size` never raises: a format without a usable size
signal yields ``nan`` and callers test the result with
:func:`math.isfinite`.
"""

from __future__ import annotations

from ytd_size.core.models import FormatDescriptor

NAN: float = float("nan")

_GIB: int = 1024**3


def estimate_size(fmt: FormatDescriptor) -> float:
    """Return the byte size of *fmt*, exact when known, else estimated.

    ``content_length`` is authoritative when present and non-zero.
    Otherwise the size is ``bitrate / 8 * approx_duration_ms / 1000``;
    a missing or zero ``bitrate`` or duration gives ``nan``.
    """
    if fmt.content_length:
        return float(fmt.content_length)
    if not fmt.bitrate or not fmt.approx_duration_ms:
        return NAN
    return fmt.bitrate / 8 * fmt.approx_duration_ms / 1000


def bytes_to_gib(size: float) -> float:
    return size / _GIB


def _or_unknown(value: object) -> str:
    return "unknown" if value is None else str(value)


def describe_video_format(fmt: FormatDescriptor) -> str:
    """One-line summary, e.g. ``"137 1080p 1920x1080 30fps 4500000bps video/mp4; …"``."""
    label = fmt.quality_label or fmt.quality or "unknown"
    return (
        f"{_or_unknown(fmt.itag)} {label} "
        f"{_or_unknown(fmt.width)}x{_or_unknown(fmt.height)} "
        f"{_or_unknown(fmt.fps)}fps {_or_unknown(fmt.bitrate)}bps "
        f"{fmt.mime_type or 'unknown'}"
    )


def describe_audio_format(fmt: FormatDescriptor) -> str:
    """One-line summary, e.g. ``"251 AUDIO_QUALITY_MEDIUM 48000Hz 2ch …"``."""
    return (
        f"{_or_unknown(fmt.itag)} {fmt.audio_quality or 'unknown'} "
        f"{_or_unknown(fmt.audio_sample_rate)}Hz "
        f"{_or_unknown(fmt.audio_channels)}ch {_or_unknown(fmt.bitrate)}bps "
        f"{fmt.mime_type or 'unknown'}"
    )
