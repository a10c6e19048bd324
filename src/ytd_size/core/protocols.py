"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters and selector
plugins must satisfy.  Core code depends ONLY on these protocols —
never on concrete implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from ytd_size.core.models import FormatDescriptor


class CatalogProvider(Protocol):
    """Contract for channel listing and metadata extraction backends.

    Any object that implements both methods with the correct signatures
    satisfies this protocol structurally (no explicit inheritance
    required).  Implementations must map all backend-specific exceptions
    to :class:`~ytd_size.exceptions.YtdSizeError` subclasses.
    """

    def list_entries(self, channel_url: str) -> list[dict[str, Any]]:
        """Return the flat entry dicts of every video on *channel_url*.

        Each dict carries at least ``"id"``; ``"title"``,
        ``"live_status"``, ``"is_live"`` and ``"is_upcoming"`` are
        optional.

        Raises
        ------
        MetadataExtractionError
            When the channel listing cannot be extracted.
        """
        ...  # pragma: no cover

    def fetch_info(self, video_url: str) -> dict[str, Any]:
        """Return the full info dict for one video, without downloading.

        The dict must contain ``"formats"`` (``list[dict]``) and should
        contain ``"duration"`` in seconds.

        Raises
        ------
        MetadataExtractionError
            When the backend fails to extract metadata.
        VideoUnavailableError
            When the video is confirmed unavailable.
        """
        ...  # pragma: no cover


class FormatSelector(Protocol):
    """Picks one video-only and one audio-only format from a mixed list.

    Implementations must not mutate *formats* and return ``None`` when
    the list holds no candidate of the requested kind.
    """

    def select_video(self, formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
        ...  # pragma: no cover

    def select_audio(self, formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
        ...  # pragma: no cover
