"""CLI application entry point and command routing for ytd-size.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ytd_size.exceptions.YtdSizeError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages and
returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  service and infrastructure layers.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ytd_size.cli import exit_codes
from ytd_size.cli.console import console
from ytd_size.config import CHANNEL_TABS, DEFAULT_CONCURRENCY, DEFAULT_TAB, Settings
from ytd_size.exceptions import YtdSizeError
from ytd_size.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``ytd-size <channel>``               — size a channel's catalog
    * ``ytd-size --init-selector <path>``  — write a selector plugin skeleton
    * ``ytd-size --version``
    """
    parser = argparse.ArgumentParser(
        prog="ytd-size",
        description=(
            "Estimate the download size of a YouTube channel: best video-only "
            "plus best audio-only stream of every video."
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "channel",
        nargs="?",
        default=None,
        help="Channel URL, @handle, or UC… channel id.",
    )
    parser.add_argument(
        "--tab",
        choices=CHANNEL_TABS,
        default=DEFAULT_TAB,
        help=f"Channel tab to enumerate (default: {DEFAULT_TAB}).",
    )
    parser.add_argument(
        "-j",
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        metavar="N",
        help=f"Metadata fetches in flight at once (default: {DEFAULT_CONCURRENCY}).",
    )
    parser.add_argument(
        "--selector",
        type=Path,
        default=None,
        metavar="PATH",
        help="Python file defining select_video and/or select_audio.",
    )
    parser.add_argument(
        "--init-selector",
        type=Path,
        default=None,
        metavar="PATH",
        help="Write a selector plugin template to PATH and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_estimate(settings: Settings) -> int:
    """Size every available video of the configured channel.

    Flow:
    1. Load the selector plugin, if any.
    2. Instantiate the yt-dlp provider and the catalog service.
    3. List the channel tab and drop live / upcoming videos.
    4. Fetch, select and accumulate, printing each video as it completes.
    5. Print the summary.
    """
    from ytd_size.cli.console import configure_logging
    from ytd_size.cli.report import print_outcome, print_summary
    from ytd_size.core.catalog_service import CatalogService
    from ytd_size.core.selection import resolve_selector
    from ytd_size.infra.plugin_loader import load_selector_plugin
    from ytd_size.infra.ytdlp_provider import YtDlpCatalogProvider

    configure_logging(settings.verbose)

    plugin = (
        load_selector_plugin(settings.selector_path)
        if settings.selector_path is not None
        else None
    )
    service = CatalogService(
        YtDlpCatalogProvider(),
        resolve_selector(plugin),
        max_workers=settings.concurrency,
    )

    console.print(f"\n[bold]Listing channel…[/bold]  {settings.channel}\n")
    videos = service.list_available_videos(settings.channel, settings.tab)
    console.print(f"Found {len(videos)} available videos\n")

    report = service.estimate(
        (video.video_id for video in videos),
        on_outcome=print_outcome,
    )
    print_summary(settings.channel, report)
    return exit_codes.SUCCESS


def _handle_init_selector(path: Path) -> int:
    """Write the selector plugin template."""
    from ytd_size.cli.plugin_template import write_template

    target = write_template(path)
    console.print(f"[bold green]Selector template written to[/bold green] {target}")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ytd-size CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.init_selector is not None:
        return _handle_init_selector(args.init_selector)

    if args.channel is None:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = Settings(
        channel=args.channel,
        tab=args.tab,
        concurrency=args.concurrency,
        selector_path=args.selector,
        verbose=args.verbose,
    ).validate()

    return _handle_estimate(settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    Wraps :func:`main` and guarantees the process never exits with a raw
    stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except YtdSizeError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
