"""Load a selector plugin from a Python source file.

A plugin is a plain ``.py`` file that defines ``select_video(formats)``
and/or ``select_audio(formats)``.  Each function receives a sequence of
:class:`~ytd_size.core.models.FormatDescriptor` and returns one of them
or ``None``.  Whatever the file leaves out falls back to the built-in
ranking.

Loading happens here, outside the core: the core only ever receives the
resulting :class:`~ytd_size.core.selection.SelectorPlugin`.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path

from ytd_size.core.selection import SelectorPlugin
from ytd_size.exceptions import SelectorPluginError

logger = logging.getLogger(__name__)

_MODULE_NAME = "ytd_size_selector_plugin"
_HOOKS: tuple[str, ...] = ("select_video", "select_audio")


def load_selector_plugin(path: Path | str) -> SelectorPlugin:
    """Execute the plugin file at *path* and collect its selection hooks.

    Raises
    ------
    SelectorPluginError
        If the file is missing, fails to import, defines neither hook,
        or binds a hook name to something that is not callable.
    """
    plugin_path = Path(path).expanduser()
    if not plugin_path.is_file():
        raise SelectorPluginError(
            f"Selector plugin not found: {plugin_path}",
            hint="Create one with: ytd-size --init-selector my_selector.py",
        )

    spec = importlib.util.spec_from_file_location(_MODULE_NAME, plugin_path)
    if spec is None or spec.loader is None:
        raise SelectorPluginError(f"Cannot load selector plugin: {plugin_path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        raise SelectorPluginError(
            f"Selector plugin {plugin_path} failed to import: {exc}",
        ) from exc

    hooks: dict[str, object] = {}
    for name in _HOOKS:
        hook = getattr(module, name, None)
        if hook is None:
            continue
        if not callable(hook):
            raise SelectorPluginError(
                f"{name} in {plugin_path} is not callable.",
            )
        hooks[name] = hook

    if not hooks:
        raise SelectorPluginError(
            f"Selector plugin {plugin_path} defines neither select_video "
            "nor select_audio.",
        )

    logger.info("Loaded selector plugin %s (%s)", plugin_path, ", ".join(hooks))
    return SelectorPlugin(**hooks)  # type: ignore[arg-type]
