"""``ytd-size --init-selector PATH`` — write a selector plugin skeleton.

The generated file re-implements the built-in policy through the public
API so users can start from working code and edit the parts they care
about.
"""

from __future__ import annotations

from pathlib import Path

from ytd_size.exceptions import SelectorPluginError

_TEMPLATE = '''\
"""Custom format selector for ytd-size.

Run with:  ytd-size CHANNEL --selector {filename}

Each function receives every format of one video (video-only,
audio-only and muxed) as a sequence of
ytd_size.core.models.FormatDescriptor, and returns one of them or None.
Delete a function to keep the built-in behaviour for that media kind.
Do not modify the formats you are given.
"""

from __future__ import annotations

from collections.abc import Sequence

from ytd_size.core.models import FormatDescriptor
from ytd_size.core.ranking import rank_audio_formats, rank_video_formats

# Uncomment for the codec examples below.
# from ytd_size.core.codecs import normalize_codec


def select_video(formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
    candidates = [f for f in formats if f.has_video and not f.has_audio]
    # Example: ignore AV1 streams.
    # candidates = [f for f in candidates if normalize_codec(f, "video") != "av01"]
    ranked = rank_video_formats(candidates)
    return ranked[0] if ranked else None


def select_audio(formats: Sequence[FormatDescriptor]) -> FormatDescriptor | None:
    candidates = [f for f in formats if f.has_audio and not f.has_video]
    # Example: only consider AAC (canonical tag "mp4a") when the video has it.
    # candidates = [f for f in candidates if normalize_codec(f, "audio") == "mp4a"] or candidates
    ranked = rank_audio_formats(candidates)
    return ranked[0] if ranked else None
'''


def render_template(filename: str = "selector.py") -> str:
    """Return the plugin source, with *filename* in the usage line."""
    return _TEMPLATE.format(filename=filename)


def write_template(path: Path | str) -> Path:
    """Write the plugin skeleton to *path*, refusing to overwrite.

    Raises
    ------
    SelectorPluginError
        If *path* already exists or cannot be written.
    """
    target = Path(path).expanduser()
    if target.exists():
        raise SelectorPluginError(
            f"Refusing to overwrite existing file: {target}",
            hint="Choose another path or delete the file first.",
        )
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_template(target.name), encoding="utf-8")
    except OSError as exc:
        raise SelectorPluginError(f"Cannot write {target}: {exc}") from exc
    return target
