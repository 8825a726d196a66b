"""CLI console helpers with optional Rich support.

Diagnostics, prompts and progress go to **stderr** through Rich;
command results go to **stdout** as plain JSON so they can be piped.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from luis_cli.exceptions import EnvironmentError


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


def emit_json(value: Any) -> None:
	"""Write *value* to stdout as 2-space indented JSON."""
	sys.stdout.write(json.dumps(value, indent=2, ensure_ascii=False))
	sys.stdout.write("\n")
	sys.stdout.flush()


def configure_logging(verbose: bool) -> None:
	"""Route ``luis_cli`` log records to stderr.

	``--verbose`` enables DEBUG records rendered by Rich's log handler;
	otherwise only warnings and above are shown.
	"""
	level = logging.DEBUG if verbose else logging.WARNING
	handler: logging.Handler
	try:
		from rich.logging import RichHandler

		handler = RichHandler(
			console=get_rich_console(),
			show_path=False,
			markup=False,
		)
		handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
	except (ModuleNotFoundError, EnvironmentError):
		handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))

	package_logger = logging.getLogger("luis_cli")
	package_logger.handlers.clear()
	package_logger.addHandler(handler)
	package_logger.setLevel(level)
	package_logger.propagate = False
