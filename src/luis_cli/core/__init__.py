"""Core / service layer — command resolution and dispatch logic.

Rules
-----
* No ``print()`` calls.
* No filesystem or network I/O.
* No imports from ``cli`` or ``infra``.
* Collaborators (HTTP, files, prompts) are injected via protocols.
"""

from luis_cli.core.config_composer import compose_config, validate_config
from luis_cli.core.models import (
    EffectiveConfig,
    ModelTrainingStatus,
    OperationDescriptor,
    TrainingStatus,
)
from luis_cli.core.orchestrator import CommandOrchestrator
from luis_cli.core.protocols import DeleteConfirmer, Dispatcher, JsonFileReader
from luis_cli.core.registry import KNOWN_VERBS, OPERATIONS, resolve_operation
from luis_cli.core.request_builder import build_request_body
from luis_cli.core.training_poller import TrainingPoller

__all__: list[str] = [
    "KNOWN_VERBS",
    "OPERATIONS",
    "CommandOrchestrator",
    "DeleteConfirmer",
    "Dispatcher",
    "EffectiveConfig",
    "JsonFileReader",
    "ModelTrainingStatus",
    "OperationDescriptor",
    "TrainingPoller",
    "TrainingStatus",
    "build_request_body",
    "compose_config",
    "resolve_operation",
    "validate_config",
]
