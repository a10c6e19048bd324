"""Run configuration for ytd-size.

Defaults live here as module constants; the CLI layer builds a
:class:`Settings` from parsed arguments and validates it before any
network access happens.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ytd_size.exceptions import InvalidChannelError

CHANNEL_TABS: tuple[str, ...] = ("streams", "videos", "shorts")
"""Channel tabs that can be enumerated."""

DEFAULT_TAB: str = "streams"
"""Live-stream archive, the catalog the tool was first written for."""

DEFAULT_CONCURRENCY: int = 10
"""Maximum number of metadata fetches in flight at once."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Validated options for a single run."""

    channel: str
    tab: str = DEFAULT_TAB
    concurrency: int = DEFAULT_CONCURRENCY
    selector_path: Path | None = None
    verbose: bool = False

    def validate(self) -> Settings:
        """Return ``self`` or raise :class:`InvalidChannelError`."""
        if not self.channel.strip():
            raise InvalidChannelError("Channel must not be empty.")
        if self.tab not in CHANNEL_TABS:
            raise InvalidChannelError(
                f"Unknown channel tab: {self.tab}",
                hint=f"Choose one of: {', '.join(CHANNEL_TABS)}",
            )
        if self.concurrency < 1:
            raise InvalidChannelError(
                f"Concurrency must be at least 1, got {self.concurrency}.",
            )
        return self
