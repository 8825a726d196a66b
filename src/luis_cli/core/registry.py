"""Static catalog of LUIS authoring operations and verb/resource lookup.

The catalog is a plain mapping from ``(verb, resource tokens)`` to an
:class:`~luis_cli.core.models.OperationDescriptor`.  Lookup failures are
turned into one of three distinct :class:`ArgumentError` messages, checked
in order: unknown verb, unknown resource, missing resource.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from luis_cli.core.models import OperationDescriptor
from luis_cli.exceptions import ArgumentError

logger = logging.getLogger(__name__)

KNOWN_VERBS: frozenset[str] = frozenset(
    {
        "add",
        "clone",
        "delete",
        "export",
        "get",
        "import",
        "list",
        "publish",
        "query",
        "set",
        "suggest",
        "train",
        "update",
    }
)

_VERSION = "/apps/{appId}/versions/{versionId}"
_PAGING = ("skip", "take")


def _op(
    name: str,
    method_alias: str,
    target: str,
    http_method: str,
    path: str,
    *,
    entity: tuple[str, str] | None = None,
    query_params: tuple[str, ...] = (),
    description: str = "",
) -> OperationDescriptor:
    entity_name, entity_type = entity if entity is not None else (None, None)
    return OperationDescriptor(
        name=name,
        target=tuple(target.split()),
        method_alias=method_alias,
        http_method=http_method,
        path=path,
        entity_name=entity_name,
        entity_type=entity_type,
        query_params=query_params,
        description=description,
    )


OPERATIONS: tuple[OperationDescriptor, ...] = (
    # --- applications ------------------------------------------------------
    _op("AddApplication", "add", "application", "POST", "/apps/",
        entity=("applicationCreateObject", "ApplicationCreateObject"),
        description="Creates a new LUIS app."),
    _op("ImportApplication", "import", "application", "POST", "/apps/import",
        entity=("luisApp", "LuisApp"), query_params=("appName",),
        description="Imports an application to LUIS."),
    _op("ListApplications", "list", "applications", "GET", "/apps/",
        query_params=_PAGING,
        description="Lists all of the user applications."),
    _op("GetApplication", "get", "application", "GET", "/apps/{appId}",
        description="Gets the application info."),
    _op("UpdateApplication", "update", "application", "PUT", "/apps/{appId}",
        entity=("applicationUpdateObject", "ApplicationUpdateObject"),
        description="Updates the name or description of the application."),
    _op("DeleteApplication", "delete", "application", "DELETE", "/apps/{appId}",
        description="Deletes an application."),
    _op("GetSettings", "get", "settings", "GET", "/apps/{appId}/settings",
        description="Gets the application settings."),
    _op("UpdateSettings", "update", "settings", "PUT", "/apps/{appId}/settings",
        entity=("applicationSettingUpdateObject", "ApplicationSettingUpdateObject"),
        description="Updates the application settings."),
    _op("ListEndpoints", "list", "endpoints", "GET", "/apps/{appId}/endpoints",
        description="Returns the available endpoint deployment regions and URLs."),
    _op("PublishApplication", "publish", "version", "POST", "/apps/{appId}/publish",
        entity=("applicationPublishObject", "ApplicationPublishObject"),
        description="Publishes a specific version of the application."),
    # --- versions ----------------------------------------------------------
    _op("ListVersions", "list", "versions", "GET", "/apps/{appId}/versions",
        query_params=_PAGING,
        description="Gets the application versions info."),
    _op("GetVersion", "get", "version", "GET", _VERSION + "/",
        description="Gets the version info."),
    _op("UpdateVersion", "update", "version", "PUT", _VERSION + "/",
        entity=("versionUpdateObject", "TaskUpdateObject"),
        description="Updates the name or description of the application version."),
    _op("DeleteVersion", "delete", "version", "DELETE", _VERSION + "/",
        description="Deletes an application version."),
    _op("CloneVersion", "clone", "version", "POST", _VERSION + "/clone",
        entity=("versionCloneObject", "TaskUpdateObject"),
        description="Creates a new version using the current snapshot of the selected version."),
    _op("ExportVersion", "export", "version", "GET", _VERSION + "/export",
        description="Exports a LUIS application to JSON format."),
    _op("ImportVersion", "import", "version", "POST", "/apps/{appId}/versions/import",
        entity=("luisApp", "LuisApp"), query_params=("versionId",),
        description="Imports a new version into a LUIS application."),
    # --- training ----------------------------------------------------------
    _op("TrainVersion", "train", "version", "POST", _VERSION + "/train",
        description="Sends a training request for a version of the application."),
    _op("GetStatus", "get", "status", "GET", _VERSION + "/train",
        description="Gets the training status of all models of the version."),
    # --- models ------------------------------------------------------------
    _op("ListIntents", "list", "intents", "GET", _VERSION + "/intents",
        query_params=_PAGING,
        description="Gets information about the intent models."),
    _op("AddIntent", "add", "intent", "POST", _VERSION + "/intents",
        entity=("intentCreateObject", "ModelCreateObject"),
        description="Adds an intent classifier to the application."),
    _op("GetIntent", "get", "intent", "GET", _VERSION + "/intents/{intentId}",
        description="Gets information about the intent model."),
    _op("DeleteIntent", "delete", "intent", "DELETE", _VERSION + "/intents/{intentId}",
        description="Deletes an intent classifier from the application."),
    _op("SuggestIntentExamples", "suggest", "intents", "GET",
        _VERSION + "/intents/{intentId}/suggest", query_params=("take",),
        description="Suggests examples that would improve the accuracy of the intent model."),
    _op("ListEntities", "list", "entities", "GET", _VERSION + "/entities",
        query_params=_PAGING,
        description="Gets information about the entity models."),
    _op("AddEntity", "add", "entity", "POST", _VERSION + "/entities",
        entity=("modelCreateObject", "ModelCreateObject"),
        description="Adds an entity extractor to the application."),
    # --- examples ----------------------------------------------------------
    _op("ListExamples", "list", "examples", "GET", _VERSION + "/examples",
        query_params=_PAGING,
        description="Returns examples to be reviewed."),
    _op("AddExample", "add", "example", "POST", _VERSION + "/example",
        entity=("exampleLabelObject", "ExampleLabelObject"),
        description="Adds a labeled example to the application."),
    _op("AddExamples", "add", "examples", "POST", _VERSION + "/examples",
        entity=("exampleLabelObjectArray", "ExampleLabelObject[]"),
        description="Adds a batch of labeled examples to the application."),
    _op("DeleteExample", "delete", "example", "DELETE",
        _VERSION + "/examples/{exampleId}",
        description="Deletes the labeled example with the specified id."),
)

_CATALOG: dict[tuple[str, tuple[str, ...]], OperationDescriptor] = {
    (op.method_alias, op.target): op for op in OPERATIONS
}

if len(_CATALOG) != len(OPERATIONS):  # pragma: no cover
    raise RuntimeError("Duplicate (verb, resource) identity in operation catalog")


def find_operation(
    verb: str,
    resources: Sequence[str],
) -> OperationDescriptor | None:
    """Return the descriptor for ``verb resources…`` or ``None``."""
    return _CATALOG.get((verb, tuple(resources)))


def resources_for(verb: str) -> list[str]:
    """Return the sorted resource paths accepted by *verb*."""
    return sorted(" ".join(op.target) for op in OPERATIONS if op.method_alias == verb)


def resolve_operation(
    verb: str,
    resources: Sequence[str],
) -> OperationDescriptor:
    """Resolve ``verb resources…`` to its catalog entry.

    Raises
    ------
    ArgumentError
        ``"<verb> is not a valid action"`` for unknown verbs,
        ``"<resource> is not a valid resource"`` when the resource tokens
        do not match, and ``"Missing resource"`` when none were given.
    """
    descriptor = find_operation(verb, resources)
    if descriptor is not None:
        logger.debug("Resolved '%s %s' to %s", verb, " ".join(resources), descriptor.name)
        return descriptor

    if verb not in KNOWN_VERBS:
        raise ArgumentError(
            f"{verb} is not a valid action",
            hint=f"Valid actions: {', '.join(sorted(KNOWN_VERBS))}",
        )

    valid = resources_for(verb)
    hint = (
        f"Valid resources for '{verb}': {', '.join(valid)}"
        if valid
        else f"'{verb}' has no resources available in this client."
    )
    if resources:
        raise ArgumentError(
            f"{' '.join(resources)} is not a valid resource",
            hint=hint,
        )
    raise ArgumentError("Missing resource", hint=hint)
