"""Core / service layer — format selection, size estimation, orchestration.

Rules
-----
* No ``print()`` calls.
* No filesystem I/O; network access only through an injected provider.
* No imports from ``cli`` or ``infra``.
* Selection, ranking and estimation are pure and deterministic.
"""

from ytd_size.core.accumulator import SizeAccumulator
from ytd_size.core.catalog_service import CatalogService
from ytd_size.core.models import (
    FormatDescriptor,
    SizeReport,
    VideoEntry,
    VideoFormats,
    VideoSizeOutcome,
)
from ytd_size.core.protocols import CatalogProvider, FormatSelector
from ytd_size.core.selection import (
    DefaultSelector,
    SelectorPlugin,
    resolve_selector,
    select_audio,
    select_video,
)
from ytd_size.core.sizing import describe_audio_format, describe_video_format, estimate_size

__all__: list[str] = [
    "CatalogProvider",
    "CatalogService",
    "DefaultSelector",
    "FormatDescriptor",
    "FormatSelector",
    "SelectorPlugin",
    "SizeAccumulator",
    "SizeReport",
    "VideoEntry",
    "VideoFormats",
    "VideoSizeOutcome",
    "describe_audio_format",
    "describe_video_format",
    "estimate_size",
    "resolve_selector",
    "select_audio",
    "select_video",
]
