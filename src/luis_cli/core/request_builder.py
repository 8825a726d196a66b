"""Request-body construction for catalog operations.

This is a syntactic gate only: it decides *where* the body comes from
(``--in`` file, a synthesis rule, or nowhere) and leaves field-level
validation to the service.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from luis_cli.core.models import OperationDescriptor
from luis_cli.core.protocols import JsonFileReader
from luis_cli.exceptions import ArgumentError

BodyBuilder = Callable[[Mapping[str, Any]], dict[str, Any]]


def _publish_version_body(raw_args: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "versionId": raw_args.get("versionId"),
        "isStaging": raw_args.get("staging") is True,
        "region": raw_args.get("region"),
    }


# (target, method_alias) -> builder used when no --in file is given.
BODY_SYNTHESIZERS: dict[tuple[tuple[str, ...], str], BodyBuilder] = {
    (("version",), "publish"): _publish_version_body,
}


def build_request_body(
    descriptor: OperationDescriptor,
    raw_args: Mapping[str, Any],
    read_json: JsonFileReader,
) -> Any | None:
    """Return the request body for *descriptor*, or ``None``.

    Parameters
    ----------
    descriptor:
        The resolved catalog operation.
    raw_args:
        Parsed command-line values.  ``raw_args["in"]`` is the input path.
    read_json:
        Loads and parses the ``--in`` file.  Its errors are not wrapped.

    Raises
    ------
    ArgumentError
        When a body is required, no ``--in`` was given and no synthesis
        rule exists for the operation.
    """
    if not descriptor.requires_body:
        return None

    input_path = raw_args.get("in")
    if input_path:
        return read_json(input_path)

    synthesize = BODY_SYNTHESIZERS.get((descriptor.target, descriptor.method_alias))
    if synthesize is not None:
        return synthesize(raw_args)

    raise ArgumentError(
        f"The --in requires an input of type: {descriptor.entity_type}",
        hint="Pass --in <file.json> containing the request body.",
    )
