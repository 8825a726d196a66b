"""Command orchestrator — ties registry, builder, dispatcher and poller.

One :meth:`CommandOrchestrator.run` call handles one command:

1. Resolve ``verb resources…`` against the catalog.
2. Build the request body.
3. Ask for confirmation before deleting an application (unless quiet).
4. Dispatch the call.
5. Optionally wait for training, follow up on app creation, and shape
   the result for output.

Guarantees
----------
* Pure orchestration — no terminal I/O, no ``print()``.
* The :class:`EffectiveConfig` is passed in, never stored globally.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from luis_cli.core.models import EffectiveConfig, OperationDescriptor
from luis_cli.core.protocols import DeleteConfirmer, Dispatcher, JsonFileReader
from luis_cli.core.registry import find_operation, resolve_operation
from luis_cli.core.request_builder import build_request_body
from luis_cli.core.training_poller import ProgressCallback, TrainingPoller
from luis_cli.exceptions import TransportError, UserAbort

logger = logging.getLogger(__name__)

WAITABLE_OPERATIONS: frozenset[str] = frozenset({"TrainVersion", "GetStatus"})
"""Operations that honour ``--wait``."""

APP_CREATION_OPERATIONS: frozenset[str] = frozenset({"AddApplication", "ImportApplication"})
"""Operations whose result is a new app id, followed by a ``get application``."""


def _require(verb: str, *target: str) -> OperationDescriptor:
    descriptor = find_operation(verb, target)
    if descriptor is None:  # pragma: no cover - catalog invariant
        raise RuntimeError(f"Operation catalog has no '{verb} {' '.join(target)}'")
    return descriptor


def build_msbot_descriptor(
    application: Mapping[str, Any],
    config: EffectiveConfig,
    body: Any | None,
) -> dict[str, Any]:
    """Reshape an application into the bot-tooling service descriptor.

    The version falls back to the request's ``initialVersionId`` (app
    creation) or ``versionId`` (app import) when the app has no active
    version yet.
    """
    version = application.get("activeVersion")
    if not version and isinstance(body, Mapping):
        version = body.get("initialVersionId") or body.get("versionId")
    return {
        "type": "luis",
        "name": application.get("name"),
        "id": application.get("id"),
        "appId": application.get("id"),
        "authoringKey": config.authoring_key,
        "subscriptionKey": config.authoring_key,
        "version": version,
    }


def _extract_app_id(result: Any) -> str:
    """Return the id of a newly created app from the creation response."""
    if isinstance(result, str) and result:
        return result
    if isinstance(result, Mapping) and result.get("id"):
        return str(result["id"])
    raise TransportError(
        f"Unexpected response while creating the application: {result!r}",
    )


class CommandOrchestrator:
    """Run one resolved command end to end.

    Parameters
    ----------
    dispatcher:
        Executes catalog operations (see :class:`Dispatcher`).
    read_json:
        Loads the ``--in`` request body.
    confirm_delete:
        Asked before ``delete application`` unless ``--quiet`` is set.
    on_progress:
        Receives ``(trained, total)`` after every training poll round.
    sleep:
        Delay function used between poll rounds.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        *,
        read_json: JsonFileReader,
        confirm_delete: DeleteConfirmer,
        on_progress: ProgressCallback | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._dispatcher: Dispatcher = dispatcher
        self._read_json = read_json
        self._confirm_delete = confirm_delete
        self._on_progress = on_progress
        self._sleep: Callable[[float], None] = sleep or time.sleep

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        config: EffectiveConfig,
        verb: str,
        resources: Sequence[str],
        raw_args: Mapping[str, Any],
    ) -> Any:
        """Execute ``verb resources…`` and return the value to print.

        Raises
        ------
        ArgumentError
            Unknown verb/resource or missing request body.
        TransportError
            The call failed or the service reported an error.
        TrainingFailure
            ``--wait`` saw a model fail.
        UserAbort
            The user declined deleting an application.
        """
        descriptor = resolve_operation(verb, resources)
        body = build_request_body(descriptor, raw_args, self._read_json)

        if descriptor.is_operation("delete", "application") and not raw_args.get("quiet"):
            self._confirm_application_delete(config, raw_args)

        result = self._dispatcher.execute(config, descriptor, raw_args, body)

        if descriptor.name in WAITABLE_OPERATIONS and raw_args.get("wait"):
            result = self.wait_for_training(config, raw_args)

        if descriptor.name in APP_CREATION_OPERATIONS:
            result = self._get_application(
                config, raw_args, app_id=_extract_app_id(result),
            )
            descriptor = _require("get", "application")

        return self._shape_output(config, descriptor, raw_args, body, result)

    def wait_for_training(
        self,
        config: EffectiveConfig,
        raw_args: Mapping[str, Any],
    ) -> Any:
        """Poll the training status of the configured version until done."""
        status_op = _require("get", "status")
        poller = TrainingPoller(
            lambda: self._dispatcher.execute(config, status_op, raw_args, None),
            on_progress=self._on_progress,
            sleep=self._sleep,
        )
        return poller.wait()

    # ------------------------------------------------------------------
    # Internal steps
    # ------------------------------------------------------------------

    def _get_application(
        self,
        config: EffectiveConfig,
        raw_args: Mapping[str, Any],
        *,
        app_id: str | None = None,
    ) -> Any:
        args = dict(raw_args)
        if app_id is not None:
            args["appId"] = app_id
        return self._dispatcher.execute(config, _require("get", "application"), args, None)

    def _confirm_application_delete(
        self,
        config: EffectiveConfig,
        raw_args: Mapping[str, Any],
    ) -> None:
        application = self._get_application(config, raw_args)
        if not isinstance(application, Mapping):
            application = {}
        if not self._confirm_delete(application):
            logger.debug("Delete of application %s declined", application.get("id"))
            raise UserAbort("Delete operation cancelled")

    @staticmethod
    def _shape_output(
        config: EffectiveConfig,
        descriptor: OperationDescriptor,
        raw_args: Mapping[str, Any],
        body: Any | None,
        result: Any,
    ) -> Any:
        # Only a fetched application is reshaped; update/delete replies are
        # status objects and pass through.
        if (
            raw_args.get("msbot")
            and descriptor.name == "GetApplication"
            and isinstance(result, Mapping)
        ):
            return build_msbot_descriptor(result, config, body)
        return result
