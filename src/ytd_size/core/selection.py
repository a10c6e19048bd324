"""Pure format selection — one best video-only and one best audio-only stream.

Pipeline order for each media kind:

1. **Filter** — keep only single-kind streams (muxed formats are dropped).
2. **Rank** — order with :mod:`ytd_size.core.ranking`.
3. **Pick** — return the first candidate, or ``None`` when none survive.

No function here raises for an empty result; callers decide how to
report a video that has no candidate.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ytd_size.core.models import FormatDescriptor
from ytd_size.core.ranking import rank_audio_formats, rank_video_formats
from ytd_size.exceptions import SelectorPluginError

SelectFn = Callable[[Sequence[FormatDescriptor]], FormatDescriptor | None]


# ---------------------------------------------------------------------------
# 1. Filter
# ---------------------------------------------------------------------------

def filter_video_only(formats: Sequence[FormatDescriptor]) -> list[FormatDescriptor]:
    """Return formats that carry video and no audio."""
    return [fmt for fmt in formats if fmt.is_video_only]


def filter_audio_only(formats: Sequence[FormatDescriptor]) -> list[FormatDescriptor]:
    """Return formats that carry audio and no video."""
    return [fmt for fmt in formats if fmt.is_audio_only]


# ---------------------------------------------------------------------------
# 2 + 3. Rank and pick
# ---------------------------------------------------------------------------

def select_video(formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
    """Return the best video-only format, or ``None``."""
    ranked = rank_video_formats(filter_video_only(formats))
    return ranked[0] if ranked else None


def select_audio(formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
    """Return the best audio-only format, or ``None``."""
    ranked = rank_audio_formats(filter_audio_only(formats))
    return ranked[0] if ranked else None


# ---------------------------------------------------------------------------
# Swappable strategy
# ---------------------------------------------------------------------------

class DefaultSelector:
    """Built-in :class:`~ytd_size.core.protocols.FormatSelector`."""

    def select_video(self, formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
        return select_video(formats)

    def select_audio(self, formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
        return select_audio(formats)


@dataclass(frozen=True, slots=True)
class SelectorPlugin:
    """Replacement selection functions supplied by a collaborator.

    Either function may be ``None``; :func:`resolve_selector` fills the
    gap with the built-in implementation.
    """

    select_video: SelectFn | None = None
    select_audio: SelectFn | None = None


@dataclass(frozen=True, slots=True)
class _PluginSelector:
    """Plugin hooks with the built-ins filling any gap.

    Hook failures and non-descriptor results surface as
    :class:`SelectorPluginError` naming the hook.
    """

    plugin: SelectorPlugin

    def select_video(self, formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
        if self.plugin.select_video is None:
            return select_video(formats)
        return _call_hook("select_video", self.plugin.select_video, formats)

    def select_audio(self, formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
        if self.plugin.select_audio is None:
            return select_audio(formats)
        return _call_hook("select_audio", self.plugin.select_audio, formats)


def _call_hook(
    name: str,
    hook: SelectFn,
    formats: Sequence[FormatDescriptor],
) -> FormatDescriptor | None:
    try:
        chosen = hook(formats)
    except Exception as exc:
        raise SelectorPluginError(
            f"Selector plugin {name} failed: {exc}",
        ) from exc
    if chosen is not None and not isinstance(chosen, FormatDescriptor):
        raise SelectorPluginError(
            f"Selector plugin {name} returned {type(chosen).__name__}, "
            "expected a FormatDescriptor or None.",
        )
    return chosen


def resolve_selector(
    plugin: SelectorPlugin | None = None,
) -> DefaultSelector | _PluginSelector:
    """Return a selector object, merging *plugin* over the built-ins."""
    if plugin is None or (plugin.select_video is None and plugin.select_audio is None):
        return DefaultSelector()
    return _PluginSelector(plugin)
