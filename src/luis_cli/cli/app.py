"""CLI application entry point and command routing for luis-cli.

This module is the **sole error boundary** for the entire application.
It catches :class:`~luis_cli.exceptions.LuisCliError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via Rich
and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — resolution, body building, dispatch and
  polling are delegated to :class:`~luis_cli.core.orchestrator.CommandOrchestrator`.
* Results are written to stdout as JSON; everything else goes to stderr.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Any

from luis_cli.cli import exit_codes
from luis_cli.cli.console import configure_logging, console, emit_json
from luis_cli.exceptions import LuisCliError, UserAbort
from luis_cli.infra.input_file import failed_input_path
from luis_cli.version import __version__

# Parser-only destinations that are not forwarded to the orchestrator.
_NON_COMMAND_ARGS: frozenset[str] = frozenset({"command", "verbose"})


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The command line is ``luis <verb> <resource...> [--flags]``; verb and
    resource tokens are collected positionally and resolved against the
    operation catalog.
    """
    parser = argparse.ArgumentParser(
        prog="luis",
        description="Command-line client for the LUIS authoring API.",
        epilog="Example: luis train version --appId <id> --versionId 0.1 --wait",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "command",
        nargs="*",
        help="Action followed by the resource it applies to, e.g. 'get application'.",
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--appId", "--applicationId", dest="appId", help="LUIS application id.")
    config_group.add_argument("--versionId", help="Application version, e.g. 0.1.")
    config_group.add_argument("--authoringKey", help="Authoring key for the LUIS service.")
    config_group.add_argument(
        "--endpoint",
        "--endpointBasePath",
        dest="endpointBasePath",
        help="Authoring API base, e.g. https://westus.api.cognitive.microsoft.com/luis/api/v2.0",
    )

    request_group = parser.add_argument_group("request")
    request_group.add_argument("--in", dest="in", metavar="PATH", help="JSON file holding the request body.")
    request_group.add_argument("--appName", help="Name for an imported application.")
    request_group.add_argument("--intentId", help="Intent classifier id.")
    request_group.add_argument("--exampleId", help="Labeled example id.")
    request_group.add_argument("--skip", type=int, help="Number of entries to skip.")
    request_group.add_argument("--take", type=int, help="Number of entries to return.")
    request_group.add_argument("--region", help="Publishing region, e.g. westus.")
    request_group.add_argument("--staging", action="store_true", help="Publish to the staging slot.")

    behaviour_group = parser.add_argument_group("behaviour")
    behaviour_group.add_argument(
        "--wait",
        action="store_true",
        help="With 'train version' or 'get status', block until training completes.",
    )
    behaviour_group.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not ask for confirmation before deleting an application.",
    )
    behaviour_group.add_argument(
        "--msbot",
        action="store_true",
        help="Print an application as a bot-tooling service descriptor.",
    )
    behaviour_group.add_argument("--verbose", action="store_true", help="Log requests to stderr.")
    return parser


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------

def _build_dispatcher() -> Any:
    """Create the HTTP dispatcher used for this invocation."""
    from luis_cli.infra.http_dispatcher import HttpDispatcher

    return HttpDispatcher()


def _handle_command(
    verb: str,
    resources: list[str],
    raw_args: dict[str, Any],
) -> int:
    """Compose configuration, run the command and print its result.

    Flow:
    1. Merge flags, ``.luisrc`` and environment into the effective config.
    2. Run the command through the orchestrator.
    3. Write the result to stdout as JSON.
    """
    from luis_cli.cli.confirm_prompt import confirm_application_delete
    from luis_cli.cli.progress import TrainingProgressReporter
    from luis_cli.core.config_composer import compose_config, validate_config
    from luis_cli.core.orchestrator import CommandOrchestrator
    from luis_cli.infra.config_store import load_persisted_config
    from luis_cli.infra.input_file import read_json_file

    config = validate_config(
        compose_config(raw_args, load_persisted_config(), os.environ),
    )

    with _build_dispatcher() as dispatcher:
        orchestrator = CommandOrchestrator(
            dispatcher,
            read_json=read_json_file,
            confirm_delete=confirm_application_delete,
            on_progress=TrainingProgressReporter(),
        )
        result = orchestrator.run(config, verb, resources, raw_args)

    emit_json(result)
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the luis CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    # Flags may appear between the verb and resource tokens.
    args = parser.parse_intermixed_args(argv)

    if not args.command:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)

    verb, *resources = args.command
    raw_args = {
        key: value
        for key, value in vars(args).items()
        if key not in _NON_COMMAND_ARGS
    }
    return _handle_command(verb, resources, raw_args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except UserAbort as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        sys.exit(exit_codes.USER_ABORT)
    except LuisCliError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        input_path = failed_input_path(exc)
        if input_path is not None:
            # --in read/parse failures surface with their native diagnostic.
            console.print(f"[bold red]Error:[/bold red] {type(exc).__name__}: {exc}")
            console.print(f"[yellow]Hint:[/yellow] Check the --in file {input_path}.")
            sys.exit(exit_codes.GENERAL_ERROR)
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
