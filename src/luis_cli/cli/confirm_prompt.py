"""Interactive confirmation before deleting a LUIS application.

This module is responsible for:

* Rendering a short Rich table identifying the application.
* Prompting the user for a yes/no answer via questionary (default "no").
* Returning ``True`` only when the answer starts with ``y``.

All display-related logic lives here — no HTTP calls, no business logic.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from luis_cli.cli.console import console
from luis_cli.exceptions import EnvironmentError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for application rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


def is_affirmative(answer: str | None) -> bool:
    """Return ``True`` for answers starting with ``y`` (any case)."""
    if answer is None:
        return False
    return answer.strip().lower().startswith("y")


def _display_application(application: Mapping[str, Any]) -> None:
    table_class = _import_rich_table()

    table = table_class(
        title="Application to delete",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("Name", justify="left", min_width=12)
    table.add_column("Id", justify="left", min_width=36)
    table.add_row(
        str(application.get("name", "Unknown")),
        str(application.get("id", "Unknown")),
    )

    console.print()
    console.print(table)
    console.print()


def confirm_application_delete(application: Mapping[str, Any]) -> bool:
    """Show *application* and ask whether to delete it.

    Returns
    -------
    bool
        ``True`` to proceed.  Any answer not starting with ``y``, an
        empty answer (default ``n``) and a cancelled prompt all decline.
    """
    questionary = _import_questionary()

    _display_application(application)

    answer: str | None = questionary.text(
        "Are you sure you want to delete this application? (y/n)",
        default="n",
    ).ask()  # Returns None on Ctrl+C / Esc

    return is_affirmative(answer)
