"""Shared pytest fixtures and configuration for the luis-cli test suite.

Guidelines
----------
* No internet access in any test — HTTP goes through ``httpx.MockTransport``
  or a fake dispatcher.
* No real sleeping and no terminal input.
* Tests must not depend on the caller's environment or ``.luisrc``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from luis_cli.core.config_composer import CONFIG_FIELDS
from luis_cli.core.models import EffectiveConfig, OperationDescriptor


@pytest.fixture(autouse=True)
def _clean_luis_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for source in CONFIG_FIELDS:
        monkeypatch.delenv(source.env_var, raising=False)


@pytest.fixture
def config() -> EffectiveConfig:
    return EffectiveConfig(
        app_id="app-1",
        authoring_key="key-123",
        version_id="0.1",
        endpoint_base_path="https://westus.api.cognitive.microsoft.com/luis/api/v2.0",
    )


class FakeDispatcher:
    """In-memory :class:`Dispatcher` keyed by operation name.

    Each operation maps to a list of successive responses; the last one
    repeats.  Exception instances are raised instead of returned.
    """

    def __init__(self, responses: Mapping[str, list[Any]] | None = None) -> None:
        self._responses: dict[str, list[Any]] = {
            name: list(values) for name, values in (responses or {}).items()
        }
        self.calls: list[tuple[str, dict[str, Any], Any]] = []

    def __enter__(self) -> FakeDispatcher:
        return self

    def __exit__(self, *_args: object) -> None:
        return None

    @property
    def call_names(self) -> list[str]:
        return [name for name, _args, _body in self.calls]

    def execute(
        self,
        config: EffectiveConfig,
        descriptor: OperationDescriptor,
        raw_args: Mapping[str, Any],
        body: Any | None,
    ) -> Any:
        self.calls.append((descriptor.name, dict(raw_args), body))
        queue = self._responses.get(descriptor.name, [None])
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, BaseException):
            raise response
        return response


def status_record(model_id: str, status: str, failure_reason: str | None = None) -> dict[str, Any]:
    """Build one per-model record of a training status report."""
    details: dict[str, Any] = {"status": status, "exampleCount": 12}
    if failure_reason is not None:
        details["failureReason"] = failure_reason
    return {"modelId": model_id, "details": details}
