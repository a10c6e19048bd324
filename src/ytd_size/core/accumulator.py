"""Running total of estimated sizes across a channel's videos.

:class:`SizeAccumulator` is a sequential fold: feed it one video at a
time from a single thread.  Videos without a selection or with a
non-finite size are counted separately and never touch the total.
"""

from __future__ import annotations

import math

from ytd_size.core.models import (
    FormatDescriptor,
    OutcomeStatus,
    SizeReport,
    VideoSizeOutcome,
)
from ytd_size.core.sizing import estimate_size


class SizeAccumulator:
    """Accumulate per-video sizes into a :class:`SizeReport`."""

    def __init__(self) -> None:
        self._total: float = 0
        self._counted: int = 0
        self._unresolved: int = 0
        self._invalid: int = 0
        self._failed: int = 0

    @property
    def total_bytes(self) -> float:
        return self._total

    def add(
        self,
        video_id: str,
        video_format: FormatDescriptor | None,
        audio_format: FormatDescriptor | None,
    ) -> VideoSizeOutcome:
        """Fold one video's selections into the total and return the verdict."""
        if video_format is None:
            self._unresolved += 1
            return VideoSizeOutcome(video_id, "no_video", audio_format=audio_format)
        if audio_format is None:
            self._unresolved += 1
            return VideoSizeOutcome(video_id, "no_audio", video_format=video_format)

        video_size = estimate_size(video_format)
        audio_size = estimate_size(audio_format)
        total = video_size + audio_size

        if not math.isfinite(total):
            self._invalid += 1
            status = "invalid_size"
        else:
            self._total += total
            self._counted += 1
            status = "counted"

        return VideoSizeOutcome(
            video_id,
            status,
            video_format=video_format,
            audio_format=audio_format,
            video_size=video_size,
            audio_size=audio_size,
        )

    def record_failure(
        self,
        video_id: str,
        reason: str,
        *,
        status: OutcomeStatus = "fetch_failed",
    ) -> VideoSizeOutcome:
        """Count a video that could not be fetched or whose selection failed."""
        self._failed += 1
        return VideoSizeOutcome(video_id, status, detail=reason)

    def report(self) -> SizeReport:
        return SizeReport(
            total_bytes=self._total,
            counted=self._counted,
            unresolved=self._unresolved,
            invalid=self._invalid,
            failed=self._failed,
        )
