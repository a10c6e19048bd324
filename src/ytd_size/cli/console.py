"""CLI console and logging helpers with optional Rich support.

This module avoids module-level imports of Rich so bootstrap paths
(``--help``, ``--version``, ``--init-selector``) keep working when Rich
is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from ytd_size.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def rich_available() -> bool:
    try:
        _load_rich_console_class()
    except EnvironmentError:
        return False
    return True


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)


console = _ConsoleProxy()


def configure_logging(verbose: bool) -> None:
    """Route ``ytd_size`` log records to stderr.

    Verbose runs log at DEBUG through :class:`rich.logging.RichHandler`;
    otherwise only warnings are shown.  Falls back to a plain stream
    handler when Rich is missing.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    handler: logging.Handler
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s"),
        )
    else:
        handler = RichHandler(
            console=get_rich_console(),
            show_path=False,
            rich_tracebacks=verbose,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("ytd_size")
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
