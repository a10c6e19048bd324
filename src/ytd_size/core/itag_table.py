"""Reference codec table keyed by YouTube itag.

Many historical itags imply fixed container and codec characteristics.
The table is the fallback signal for codec normalisation when a
format's ``mime_type`` does not name a codec, and for the AV1 itags that
YouTube sometimes serves with an ``"unknown"`` codec string.

Entries follow the format list documented by yt-dlp's YouTube
extractor.  The mapping is built once at import time and exposed
read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ReferenceCodecEntry:
    """Known characteristics of one itag."""

    ext: str
    vcodec: str | None = None
    acodec: str | None = None
    width: int | None = None
    height: int | None = None
    fps: int | None = None
    abr: int | None = None
    """Nominal audio bitrate in kbps."""
    format_note: str | None = None
    container: str | None = None
    preference: int | None = None
    """Negative hint for 3D and HLS variants."""


def _e(ext: str, **fields: object) -> ReferenceCodecEntry:
    return ReferenceCodecEntry(ext=ext, **fields)  # type: ignore[arg-type]


_DASH_V = "DASH video"
_DASH_A = "DASH audio"

_ENTRIES: dict[int, ReferenceCodecEntry] = {
    # Flash-era and legacy muxed
    5: _e("flv", width=400, height=240, acodec="mp3", abr=64, vcodec="h263"),
    6: _e("flv", width=450, height=270, acodec="mp3", abr=64, vcodec="h263"),
    13: _e("3gp", acodec="aac", vcodec="mp4v"),
    17: _e("3gp", width=176, height=144, acodec="aac", abr=24, vcodec="mp4v"),
    18: _e("mp4", width=640, height=360, acodec="aac", abr=96, vcodec="h264"),
    22: _e("mp4", width=1280, height=720, acodec="aac", abr=192, vcodec="h264"),
    34: _e("flv", width=640, height=360, acodec="aac", abr=128, vcodec="h264"),
    35: _e("flv", width=854, height=480, acodec="aac", abr=128, vcodec="h264"),
    # 320x180 or 320x240 depending on the upload
    36: _e("3gp", width=320, acodec="aac", vcodec="mp4v"),
    37: _e("mp4", width=1920, height=1080, acodec="aac", abr=192, vcodec="h264"),
    38: _e("mp4", width=4096, height=3072, acodec="aac", abr=192, vcodec="h264"),
    43: _e("webm", width=640, height=360, acodec="vorbis", abr=128, vcodec="vp8"),
    44: _e("webm", width=854, height=480, acodec="vorbis", abr=128, vcodec="vp8"),
    45: _e("webm", width=1280, height=720, acodec="vorbis", abr=192, vcodec="vp8"),
    46: _e("webm", width=1920, height=1080, acodec="vorbis", abr=192, vcodec="vp8"),
    59: _e("mp4", width=854, height=480, acodec="aac", abr=128, vcodec="h264"),
    78: _e("mp4", width=854, height=480, acodec="aac", abr=128, vcodec="h264"),
    # 3D
    82: _e("mp4", height=360, format_note="3D", acodec="aac", abr=128, vcodec="h264", preference=-20),
    83: _e("mp4", height=480, format_note="3D", acodec="aac", abr=128, vcodec="h264", preference=-20),
    84: _e("mp4", height=720, format_note="3D", acodec="aac", abr=192, vcodec="h264", preference=-20),
    85: _e("mp4", height=1080, format_note="3D", acodec="aac", abr=192, vcodec="h264", preference=-20),
    100: _e("webm", height=360, format_note="3D", acodec="vorbis", abr=128, vcodec="vp8", preference=-20),
    101: _e("webm", height=480, format_note="3D", acodec="vorbis", abr=192, vcodec="vp8", preference=-20),
    102: _e("webm", height=720, format_note="3D", acodec="vorbis", abr=192, vcodec="vp8", preference=-20),
    # Apple HTTP Live Streaming
    91: _e("mp4", height=144, format_note="HLS", acodec="aac", abr=48, vcodec="h264", preference=-10),
    92: _e("mp4", height=240, format_note="HLS", acodec="aac", abr=48, vcodec="h264", preference=-10),
    93: _e("mp4", height=360, format_note="HLS", acodec="aac", abr=128, vcodec="h264", preference=-10),
    94: _e("mp4", height=480, format_note="HLS", acodec="aac", abr=128, vcodec="h264", preference=-10),
    95: _e("mp4", height=720, format_note="HLS", acodec="aac", abr=256, vcodec="h264", preference=-10),
    96: _e("mp4", height=1080, format_note="HLS", acodec="aac", abr=256, vcodec="h264", preference=-10),
    132: _e("mp4", height=240, format_note="HLS", acodec="aac", abr=48, vcodec="h264", preference=-10),
    151: _e("mp4", height=72, format_note="HLS", acodec="aac", abr=24, vcodec="h264", preference=-10),
    # DASH mp4 video
    133: _e("mp4", height=240, format_note=_DASH_V, vcodec="h264"),
    134: _e("mp4", height=360, format_note=_DASH_V, vcodec="h264"),
    135: _e("mp4", height=480, format_note=_DASH_V, vcodec="h264"),
    136: _e("mp4", height=720, format_note=_DASH_V, vcodec="h264"),
    137: _e("mp4", height=1080, format_note=_DASH_V, vcodec="h264"),
    # height varies
    138: _e("mp4", format_note=_DASH_V, vcodec="h264"),
    160: _e("mp4", height=144, format_note=_DASH_V, vcodec="h264"),
    212: _e("mp4", height=480, format_note=_DASH_V, vcodec="h264"),
    264: _e("mp4", height=1440, format_note=_DASH_V, vcodec="h264"),
    298: _e("mp4", height=720, format_note=_DASH_V, vcodec="h264", fps=60),
    299: _e("mp4", height=1080, format_note=_DASH_V, vcodec="h264", fps=60),
    266: _e("mp4", height=2160, format_note=_DASH_V, vcodec="h264"),
    # DASH mp4 audio
    139: _e("m4a", format_note=_DASH_A, acodec="aac", abr=48, container="m4a_dash"),
    140: _e("m4a", format_note=_DASH_A, acodec="aac", abr=128, container="m4a_dash"),
    141: _e("m4a", format_note=_DASH_A, acodec="aac", abr=256, container="m4a_dash"),
    256: _e("m4a", format_note=_DASH_A, acodec="aac", container="m4a_dash"),
    258: _e("m4a", format_note=_DASH_A, acodec="aac", container="m4a_dash"),
    325: _e("m4a", format_note=_DASH_A, acodec="dtse", container="m4a_dash"),
    328: _e("m4a", format_note=_DASH_A, acodec="ec-3", container="m4a_dash"),
    # DASH webm video
    167: _e("webm", height=360, width=640, format_note=_DASH_V, container="webm", vcodec="vp8"),
    168: _e("webm", height=480, width=854, format_note=_DASH_V, container="webm", vcodec="vp8"),
    169: _e("webm", height=720, width=1280, format_note=_DASH_V, container="webm", vcodec="vp8"),
    170: _e("webm", height=1080, width=1920, format_note=_DASH_V, container="webm", vcodec="vp8"),
    218: _e("webm", height=480, width=854, format_note=_DASH_V, container="webm", vcodec="vp8"),
    219: _e("webm", height=480, width=854, format_note=_DASH_V, container="webm", vcodec="vp8"),
    278: _e("webm", height=144, format_note=_DASH_V, container="webm", vcodec="vp9"),
    242: _e("webm", height=240, format_note=_DASH_V, vcodec="vp9"),
    243: _e("webm", height=360, format_note=_DASH_V, vcodec="vp9"),
    244: _e("webm", height=480, format_note=_DASH_V, vcodec="vp9"),
    245: _e("webm", height=480, format_note=_DASH_V, vcodec="vp9"),
    246: _e("webm", height=480, format_note=_DASH_V, vcodec="vp9"),
    247: _e("webm", height=720, format_note=_DASH_V, vcodec="vp9"),
    248: _e("webm", height=1080, format_note=_DASH_V, vcodec="vp9"),
    271: _e("webm", height=1440, format_note=_DASH_V, vcodec="vp9"),
    # 3840x2160 or 7680x4320 depending on the upload
    272: _e("webm", height=2160, format_note=_DASH_V, vcodec="vp9"),
    302: _e("webm", height=720, format_note=_DASH_V, vcodec="vp9", fps=60),
    303: _e("webm", height=1080, format_note=_DASH_V, vcodec="vp9", fps=60),
    308: _e("webm", height=1440, format_note=_DASH_V, vcodec="vp9", fps=60),
    313: _e("webm", height=2160, format_note=_DASH_V, vcodec="vp9"),
    315: _e("webm", height=2160, format_note=_DASH_V, vcodec="vp9", fps=60),
    # DASH webm audio
    171: _e("webm", acodec="vorbis", format_note=_DASH_A, abr=128),
    172: _e("webm", acodec="vorbis", format_note=_DASH_A, abr=256),
    249: _e("webm", format_note=_DASH_A, acodec="opus", abr=50),
    250: _e("webm", format_note=_DASH_A, acodec="opus", abr=70),
    251: _e("webm", format_note=_DASH_A, acodec="opus", abr=160),
    # AV1 video-only, sometimes served with "unknown" codecs
    394: _e("mp4", height=144, format_note=_DASH_V, vcodec="av01.0.00M.08"),
    395: _e("mp4", height=240, format_note=_DASH_V, vcodec="av01.0.00M.08"),
    396: _e("mp4", height=360, format_note=_DASH_V, vcodec="av01.0.01M.08"),
    397: _e("mp4", height=480, format_note=_DASH_V, vcodec="av01.0.04M.08"),
    398: _e("mp4", height=720, format_note=_DASH_V, vcodec="av01.0.05M.08"),
    399: _e("mp4", height=1080, format_note=_DASH_V, vcodec="av01.0.08M.08"),
    400: _e("mp4", height=1440, format_note=_DASH_V, vcodec="av01.0.12M.08"),
    401: _e("mp4", height=2160, format_note=_DASH_V, vcodec="av01.0.12M.08"),
}

REFERENCE_CODECS: Mapping[int, ReferenceCodecEntry] = MappingProxyType(_ENTRIES)


def lookup(itag: int | None) -> ReferenceCodecEntry | None:
    """Return the reference entry for *itag*, or ``None`` when unknown."""
    if itag is None:
        return None
    return REFERENCE_CODECS.get(itag)
