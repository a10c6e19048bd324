"""Format ranking — a fixed multi-key total order over candidates.

Each ranking is an ordered tuple of :class:`RankStep` entries.  Two
candidates are compared step by step and the first step that tells them
apart decides; when every step ties, the stable sort keeps input order
so the first-seen candidate wins.

Every step compares values where **higher is better**.  A step whose
value is missing on either side is skipped, except the codec step,
where a recognised codec always beats an unrecognised one.
"""

from __future__ import annotations

import functools
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ytd_size.core.codecs import (
    AUDIO_CODEC_PREFERENCE,
    VIDEO_CODEC_PREFERENCE,
    codec_rank,
    normalize_codec,
)
from ytd_size.core.models import AUDIO_QUALITY_ORDER, FormatDescriptor

_LABEL_RE = re.compile(r"^\s*(\d+)p")

Comparator = Callable[[object, object], int]


# ---------------------------------------------------------------------------
# Comparators (negative → a is better)
# ---------------------------------------------------------------------------

def compare_when_both(a: object, b: object) -> int:
    """Higher value first; ties or a missing side compare equal."""
    if a is None or b is None or a == b:
        return 0
    return -1 if a > b else 1  # type: ignore[operator]


def compare_known_first(a: object, b: object) -> int:
    """Higher value first; a known value beats ``None``."""
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return compare_when_both(a, b)


@dataclass(frozen=True, slots=True)
class RankStep:
    """One ranking key: how to read it and how to compare it."""

    name: str
    extract: Callable[[FormatDescriptor], object]
    compare: Comparator = compare_when_both


def compare_formats(
    a: FormatDescriptor,
    b: FormatDescriptor,
    steps: Sequence[RankStep],
) -> int:
    """Return the first non-zero step result, or ``0`` on a full tie."""
    for step in steps:
        result = step.compare(step.extract(a), step.extract(b))
        if result:
            return result
    return 0


def rank_formats(
    formats: Sequence[FormatDescriptor],
    steps: Sequence[RankStep],
) -> list[FormatDescriptor]:
    """Return a new list ordered best first; *formats* is left untouched."""
    key = functools.cmp_to_key(lambda a, b: compare_formats(a, b, steps))
    return sorted(formats, key=key)


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------

def quality_label_height(fmt: FormatDescriptor) -> int | None:
    """Numeric prefix of ``quality_label`` (``"1080p60"`` → ``1080``)."""
    if not fmt.quality_label:
        return None
    match = _LABEL_RE.match(fmt.quality_label)
    return int(match.group(1)) if match else None


def audio_quality_rank(fmt: FormatDescriptor) -> int | None:
    """Index in :data:`AUDIO_QUALITY_ORDER`; unlisted levels rank below LOW."""
    if fmt.audio_quality is None:
        return None
    if fmt.audio_quality not in AUDIO_QUALITY_ORDER:
        return -1
    return AUDIO_QUALITY_ORDER.index(fmt.audio_quality)


def video_codec_rank(fmt: FormatDescriptor) -> int | None:
    return codec_rank(normalize_codec(fmt, "video"), VIDEO_CODEC_PREFERENCE)


def audio_codec_rank(fmt: FormatDescriptor) -> int | None:
    return codec_rank(normalize_codec(fmt, "audio"), AUDIO_CODEC_PREFERENCE)


# ---------------------------------------------------------------------------
# Rankings
# ---------------------------------------------------------------------------

VIDEO_RANKING: tuple[RankStep, ...] = (
    RankStep("quality_label", quality_label_height),
    RankStep("width", lambda f: f.width),
    RankStep("height", lambda f: f.height),
    RankStep("fps", lambda f: f.fps),
    RankStep("codec", video_codec_rank, compare_known_first),
)

AUDIO_RANKING: tuple[RankStep, ...] = (
    RankStep("audio_quality", audio_quality_rank),
    RankStep("audio_channels", lambda f: f.audio_channels),
    RankStep("audio_sample_rate", lambda f: f.audio_sample_rate),
    RankStep("codec", audio_codec_rank, compare_known_first),
)


def rank_video_formats(formats: Sequence[FormatDescriptor]) -> list[FormatDescriptor]:
    """Order video candidates best first."""
    return rank_formats(formats, VIDEO_RANKING)


def rank_audio_formats(formats: Sequence[FormatDescriptor]) -> list[FormatDescriptor]:
    """Order audio candidates best first."""
    return rank_formats(formats, AUDIO_RANKING)
