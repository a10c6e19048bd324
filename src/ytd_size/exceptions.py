"""Custom exception hierarchy for ytd-size.

All exceptions that cross layer boundaries must inherit from
:class:`YtdSizeError`.  Raw third-party exceptions (e.g. from yt-dlp)
must never propagate beyond the infrastructure layer — they are caught
and re-raised as a typed subclass defined here.

The selection and sizing core raises none of these: an empty candidate
list is a ``None`` result and an unknown size is ``nan``.

Hierarchy
---------
YtdSizeError
├── InvalidChannelError
├── MetadataExtractionError
├── VideoUnavailableError
├── SelectorPluginError
└── EnvironmentError
"""

from __future__ import annotations


class YtdSizeError(Exception):
    """Base exception for all ytd-size errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input validation ------------------------------------------------------

class InvalidChannelError(YtdSizeError):
    """Raised when the channel argument or its options fail validation."""


# --- Metadata / extraction -------------------------------------------------

class MetadataExtractionError(YtdSizeError):
    """Raised when yt-dlp fails to extract channel or video metadata."""


class VideoUnavailableError(YtdSizeError):
    """Raised when a video is unavailable (private, removed, etc.)."""


# --- Selector plugins ------------------------------------------------------

class SelectorPluginError(YtdSizeError):
    """Raised when a selector plugin file cannot be loaded or is unusable."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(YtdSizeError):
    """Raised when a required runtime dependency is not available."""


def append_ytdlp_upgrade_suggestion(hint: str) -> str:
    """Append yt-dlp upgrade guidance to an existing hint text.

    The suggestion is appended only once and preserves the original
    hint content verbatim.
    """
    marker = "Also try updating yt-dlp:"
    if marker in hint:
        return hint
    return "\n".join(
        (
            hint,
            marker,
            "    pip install --upgrade yt-dlp",
        )
    )
