"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and CLI adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from luis_cli.core.models import EffectiveConfig, OperationDescriptor


class Dispatcher(Protocol):
    """Contract for the backend that executes one catalog operation."""

    def execute(
        self,
        config: EffectiveConfig,
        descriptor: OperationDescriptor,
        raw_args: Mapping[str, Any],
        body: Any | None,
    ) -> Any:
        """Execute *descriptor* and return the parsed JSON result.

        Route parameters in ``descriptor.path`` are filled from *raw_args*
        first, then from *config*.

        Raises
        ------
        ArgumentError
            When a route parameter has no value.
        TransportError
            When the call fails or the service reports an error.
        """
        ...  # pragma: no cover


class JsonFileReader(Protocol):
    """Contract for loading a request body from the ``--in`` path."""

    def __call__(self, path: str) -> Any:
        """Read *path* and return the parsed JSON value.

        Read and parse errors must propagate unchanged.
        """
        ...  # pragma: no cover


class DeleteConfirmer(Protocol):
    """Contract for the interactive confirmation before deleting an app."""

    def __call__(self, application: Mapping[str, Any]) -> bool:
        """Show *application* to the user and return ``True`` to proceed."""
        ...  # pragma: no cover
