"""Allow ``python -m luis_cli`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m luis_cli`` behaves identically to the ``luis``
console script.
"""

from __future__ import annotations

from luis_cli.cli.app import cli

if __name__ == "__main__":
    cli()
