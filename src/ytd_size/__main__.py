"""Allow ``python -m ytd_size`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m ytd_size`` behaves identically to the ``ytd-size`` console
script.
"""

from __future__ import annotations

from ytd_size.cli.app import cli

if __name__ == "__main__":
    cli()
