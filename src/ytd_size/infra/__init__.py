"""Infrastructure layer — external system integration.

This layer wraps all interaction with yt-dlp and with user-supplied
plugin files.  Every raw third-party exception must be caught here and
re-raised as a :class:`~ytd_size.exceptions.YtdSizeError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from ytd_size.infra.plugin_loader import load_selector_plugin
from ytd_size.infra.ytdlp_provider import YtDlpCatalogProvider

__all__: list[str] = [
    "YtDlpCatalogProvider",
    "load_selector_plugin",
]
