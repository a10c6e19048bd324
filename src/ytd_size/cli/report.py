"""Rendering of per-video outcomes and the final size summary.

Per-video lines are printed as each video is folded into the total;
the summary is a Rich table, or a plain-text block when Rich is not
installed.  No business logic lives here.
"""

from __future__ import annotations

import math
import sys

from ytd_size.cli.console import console, rich_available
from ytd_size.core.models import SizeReport, VideoSizeOutcome
from ytd_size.core.sizing import bytes_to_gib, describe_audio_format, describe_video_format


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms, no I/O)
# ---------------------------------------------------------------------------

def format_bytes(size: float | None) -> str:
    """Render a byte count as ``"960000 bytes"`` or ``"invalid"``."""
    if size is None or not math.isfinite(size):
        return "invalid"
    return f"{size:.0f} bytes"


def format_gib(size: float) -> str:
    if not math.isfinite(size):
        return "invalid"
    return f"{bytes_to_gib(size):.2f} GiB"


def outcome_lines(outcome: VideoSizeOutcome) -> list[str]:
    """Return the diagnostic lines (Rich markup) for one video."""
    vid = outcome.video_id
    if outcome.status == "no_video":
        return [f"[yellow]No video format found for {vid}[/yellow]"]
    if outcome.status == "no_audio":
        return [f"[yellow]No audio format found for {vid}[/yellow]"]
    if outcome.status == "fetch_failed":
        return [f"[red]Could not fetch {vid}:[/red] {outcome.detail or 'unknown error'}"]
    if outcome.status == "selection_failed":
        return [f"[red]Could not select formats for {vid}:[/red] {outcome.detail or 'unknown error'}"]

    lines: list[str] = []
    if outcome.video_format is not None:
        lines.append(f"Video format for {vid}: {describe_video_format(outcome.video_format)}")
    if outcome.audio_format is not None:
        lines.append(f"Audio format for {vid}: {describe_audio_format(outcome.audio_format)}")
    lines.append(
        f"  video {format_bytes(outcome.video_size)}, "
        f"audio {format_bytes(outcome.audio_size)}"
    )
    if outcome.status == "invalid_size":
        lines.append(f"[red]Invalid size for {vid}[/red]")
    else:
        total = outcome.total_size or 0.0
        lines.append(f"  total {format_bytes(total)} ({format_gib(total)})")
    return lines


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def print_outcome(outcome: VideoSizeOutcome) -> None:
    for line in outcome_lines(outcome):
        console.print(line)


def _summary_rows(report: SizeReport) -> list[tuple[str, str]]:
    return [
        ("Videos sized", str(report.counted)),
        ("No format", str(report.unresolved)),
        ("Invalid size", str(report.invalid)),
        ("Failed", str(report.failed)),
        ("Total", format_bytes(report.total_bytes)),
        ("Total (GiB)", format_gib(report.total_bytes)),
    ]


def print_summary(channel: str, report: SizeReport) -> None:
    """Render the final totals for *channel*."""
    rows = _summary_rows(report)

    if not rich_available():
        print(f"\nTotal size for all videos of {channel}", file=sys.stderr)
        print("-" * 40, file=sys.stderr)
        for label, value in rows:
            print(f"{label:<14} {value}", file=sys.stderr)
        print(file=sys.stderr)
        return

    from rich.table import Table

    table = Table(
        title=f"Total size for all videos of {channel}",
        show_header=False,
        border_style="dim",
    )
    table.add_column("Metric", style="bold", min_width=14)
    table.add_column("Value", justify="right", min_width=20)
    for label, value in rows:
        table.add_row(label, value)

    console.print()
    console.print(table)
    console.print()
