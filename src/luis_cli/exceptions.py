"""Custom exception hierarchy for luis-cli.

All exceptions that cross layer boundaries must inherit from
:class:`LuisCliError`.  Raw ``httpx`` exceptions must NEVER propagate
beyond the infrastructure layer — they are caught and re-raised as
:class:`TransportError`.

The one deliberate exception to this rule is the ``--in`` input file:
read and JSON-parse failures surface unwrapped so the user sees the
native diagnostic.  The reader tags them with the failing path so the CLI
boundary reports only those as known errors.

Hierarchy
---------
LuisCliError
├── ConfigurationError
├── ArgumentError
├── TransportError
├── TrainingFailure
├── UserAbort
└── EnvironmentError
"""

from __future__ import annotations


class LuisCliError(Exception):
    """Base exception for all luis-cli errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Configuration ---------------------------------------------------------

class ConfigurationError(LuisCliError):
    """Raised when a required configuration value is missing or unreadable."""


# --- Command line ----------------------------------------------------------

class ArgumentError(LuisCliError):
    """Raised for unknown verbs/resources and missing required inputs."""


# --- Transport -------------------------------------------------------------

class TransportError(LuisCliError):
    """Raised when the HTTP call fails or the service reports an error.

    The server's message is kept verbatim; its error code, when the
    response carried one, is exposed separately as :attr:`code`.
    """

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        status_code: int | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.code: str | None = code
        self.status_code: int | None = status_code


# --- Training --------------------------------------------------------------

class TrainingFailure(LuisCliError):
    """Raised when a model reports ``Fail`` while waiting for training."""

    def __init__(self, model_id: str, failure_reason: str | None) -> None:
        super().__init__(
            f"Training failed for model {model_id}: {failure_reason}",
        )
        self.model_id: str = model_id
        self.failure_reason: str | None = failure_reason


# --- Interaction -----------------------------------------------------------

class UserAbort(LuisCliError):
    """Raised when the user declines a destructive operation."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(LuisCliError):
    """Raised when a required runtime dependency is not available."""
