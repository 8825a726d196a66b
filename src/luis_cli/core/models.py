"""Domain models for luis-cli.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They carry zero I/O and no dependencies
on external packages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Effective configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class EffectiveConfig:
    """Configuration used for exactly one invocation.

    Every field is optional until :func:`~luis_cli.core.config_composer.validate_config`
    has run; after validation ``authoring_key`` and ``endpoint_base_path``
    are guaranteed to be non-empty strings.
    """

    app_id: str | None = None
    """LUIS application id (``appId``)."""

    authoring_key: str | None = None
    """Authoring key sent as the subscription-key header."""

    version_id: str | None = None
    """Application version (``versionId``), e.g. ``"0.1"``."""

    endpoint_base_path: str | None = None
    """Authoring API base, e.g. ``https://westus.api.cognitive.microsoft.com/luis/api/v2.0``."""


# ---------------------------------------------------------------------------
# Operation descriptor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class OperationDescriptor:
    """One entry of the operation catalog.

    Identified by ``(method_alias, target)``, which is unique across the
    catalog.
    """

    name: str
    """Operation identifier, e.g. ``"TrainVersion"``."""

    target: tuple[str, ...]
    """Resource-path tokens, e.g. ``("application",)``."""

    method_alias: str
    """Verb that selects this operation (``add``, ``get``, ``train``…)."""

    http_method: str
    """HTTP method used on the wire."""

    path: str
    """Path template relative to the endpoint base, with ``{param}`` slots."""

    entity_name: str | None = None
    """Name of the request body; ``None`` when no body is sent."""

    entity_type: str | None = None
    """Type of the request body, shown when ``--in`` is missing."""

    query_params: tuple[str, ...] = ()
    """Flags forwarded as query-string parameters when present."""

    description: str = ""
    """One-line summary used in error hints."""

    @property
    def requires_body(self) -> bool:
        return self.entity_name is not None

    def is_operation(self, method_alias: str, *target: str) -> bool:
        """Return ``True`` if this descriptor is ``<method_alias> <target…>``."""
        return self.method_alias == method_alias and self.target == target


# ---------------------------------------------------------------------------
# Training status
# ---------------------------------------------------------------------------

class TrainingStatus(str, Enum):
    """Per-model training states reported by the status endpoint."""

    QUEUED = "Queued"
    IN_PROGRESS = "InProgress"
    SUCCESS = "Success"
    UP_TO_DATE = "UpToDate"
    FAIL = "Fail"


@dataclass(frozen=True, slots=True)
class ModelTrainingStatus:
    """Training state of a single model (intent or entity)."""

    model_id: str
    status: str
    failure_reason: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> ModelTrainingStatus:
        """Parse one ``{"modelId": ..., "details": {...}}`` record."""
        details = record.get("details")
        if not isinstance(details, dict):
            details = {}
        return cls(
            model_id=str(record.get("modelId", "")),
            status=str(details.get("status", "")),
            failure_reason=details.get("failureReason"),
        )
