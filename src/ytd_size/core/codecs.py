"""Codec normalisation — raw codec strings to canonical tags.

A format's codec is read from the ``codecs=`` parameter of its
``mime_type`` first; when the media type does not name one, the itag
reference table is consulted.  The raw string is then reduced to a
canonical tag (``h264``, ``vp9``, ``opus`` …) by substring match against
an ordered alias list, because raw tags carry profile and level
suffixes (``avc1.640028``, ``mp4a.40.2``, ``vp09.02.51.10``).

The preference sequences used for ranking live here too, ordered worst
to best.
"""

from __future__ import annotations

from ytd_size.core import itag_table
from ytd_size.core.models import FormatDescriptor, MediaKind

VIDEO_CODEC_PREFERENCE: tuple[str, ...] = (
    "theora",
    "h263",
    "vp8",
    "h264",
    "h265",
    "vp9",
    "vp9.2",
    "av01",
)

AUDIO_CODEC_PREFERENCE: tuple[str, ...] = (
    "dts",
    "ac3",
    "eac3",
    "ac4",
    "mp3",
    "mp4a",
    "aac",
    "vorbis",
    "opus",
    "aiff",
    "wav",
    "alac",
    "flac",
)

# First alias contained in the raw tag wins, so longer or more specific
# aliases precede the ones they contain ("vp09.02" before "vp09",
# "eac3" before "ac3").
VIDEO_CODEC_ALIASES: tuple[tuple[str, str], ...] = (
    ("avc1", "h264"),
    ("avc3", "h264"),
    ("h264", "h264"),
    ("hev1", "h265"),
    ("hvc1", "h265"),
    ("hevc", "h265"),
    ("h265", "h265"),
    ("vp09.02", "vp9.2"),
    ("vp9.2", "vp9.2"),
    ("vp09", "vp9"),
    ("vp9", "vp9"),
    ("vp8", "vp8"),
    ("av01", "av01"),
    ("mp4v", "h263"),
    ("h263", "h263"),
    ("theora", "theora"),
)

AUDIO_CODEC_ALIASES: tuple[tuple[str, str], ...] = (
    ("mp4a", "mp4a"),
    ("aac", "aac"),
    ("opus", "opus"),
    ("vorbis", "vorbis"),
    ("mp3", "mp3"),
    ("ec-3", "eac3"),
    ("eac3", "eac3"),
    ("ac-3", "ac3"),
    ("ac3", "ac3"),
    ("ac-4", "ac4"),
    ("ac4", "ac4"),
    ("dts", "dts"),
    ("flac", "flac"),
    ("alac", "alac"),
    ("wav", "wav"),
    ("aiff", "aiff"),
)

_ALIASES: dict[str, tuple[tuple[str, str], ...]] = {
    "video": VIDEO_CODEC_ALIASES,
    "audio": AUDIO_CODEC_ALIASES,
}


def parse_mime_codecs(mime_type: str | None) -> list[str]:
    """Return the codec list of a media type, quotes stripped.

    ``'video/mp4; codecs="avc1.42001E, mp4a.40.2"'`` yields
    ``["avc1.42001E", "mp4a.40.2"]``; a media type without a
    ``codecs`` parameter yields ``[]``.
    """
    if not mime_type:
        return []
    for param in mime_type.split(";")[1:]:
        name, sep, value = param.partition("=")
        if not sep or name.strip().lower() != "codecs":
            continue
        value = value.strip().strip("\"'")
        return [part.strip() for part in value.split(",") if part.strip()]
    return []


def canonical_codec(raw: str, kind: MediaKind) -> str | None:
    """Map a raw codec string to its canonical tag for *kind*.

    Returns ``None`` when no alias of *kind* is contained in *raw*.
    """
    lowered = raw.lower()
    for alias, canonical in _ALIASES[kind]:
        if alias in lowered:
            return canonical
    return None


def _raw_from_mime(fmt: FormatDescriptor, kind: MediaKind) -> str | None:
    parts = parse_mime_codecs(fmt.mime_type)
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    # Muxed: pick the component that belongs to this media kind.
    for part in parts:
        if canonical_codec(part, kind) is not None:
            return part
    return parts[0] if kind == "video" else parts[-1]


def _raw_from_table(fmt: FormatDescriptor, kind: MediaKind) -> str | None:
    entry = itag_table.lookup(fmt.itag)
    if entry is None:
        return None
    return entry.vcodec if kind == "video" else entry.acodec


def normalize_codec(fmt: FormatDescriptor, kind: MediaKind) -> str | None:
    """Return the canonical codec tag of *fmt* for *kind*.

    Unknown raw tags are returned lower-cased and unchanged; ``None``
    means neither the media type nor the itag table carries a codec.
    """
    raw = _raw_from_mime(fmt, kind)
    if not raw or raw.lower() == "unknown":
        raw = _raw_from_table(fmt, kind)
    if not raw:
        return None
    return canonical_codec(raw, kind) or raw.lower()


def codec_rank(codec: str | None, preference: tuple[str, ...]) -> int | None:
    """Index of *codec* in *preference* (higher is better), or ``None``."""
    if codec is None:
        return None
    try:
        return preference.index(codec)
    except ValueError:
        return None
