"""Merge command-line flags, persisted config and environment variables.

Precedence for every field, highest first::

    command-line flag  >  persisted config  >  environment variable  >  absent

Each field is resolved independently.  Empty strings count as absent at
every level.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from luis_cli.core.models import EffectiveConfig
from luis_cli.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class _FieldSource:
    """Where one :class:`EffectiveConfig` field may come from."""

    attr: str
    flags: tuple[str, ...]
    persisted_key: str
    env_var: str


CONFIG_FIELDS: tuple[_FieldSource, ...] = (
    _FieldSource("app_id", ("appId", "applicationId"), "appId", "LUIS_APP_ID"),
    _FieldSource("authoring_key", ("authoringKey",), "authoringKey", "LUIS_AUTHORING_KEY"),
    _FieldSource("version_id", ("versionId",), "versionId", "LUIS_VERSION_ID"),
    _FieldSource(
        "endpoint_base_path",
        ("endpoint", "endpointBasePath"),
        "endpointBasePath",
        "LUIS_ENDPOINT_BASE_PATH",
    ),
)

_INIT_HINT = (
    "Run 'luis --init' to create a .luisrc file, pass --{flag}, "
    "or set {env_var}."
)


_REQUIRED_FIELDS: tuple[str, ...] = ("authoring_key", "endpoint_base_path")


def _present(value: object) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text else None


def _resolve_field(
    source: _FieldSource,
    flags: Mapping[str, Any],
    persisted: Mapping[str, Any],
    environ: Mapping[str, str],
) -> str | None:
    for flag in source.flags:
        value = _present(flags.get(flag))
        if value is not None:
            return value
    value = _present(persisted.get(source.persisted_key))
    if value is not None:
        return value
    return _present(environ.get(source.env_var))


def compose_config(
    flags: Mapping[str, Any],
    persisted: Mapping[str, Any],
    environ: Mapping[str, str],
) -> EffectiveConfig:
    """Build the :class:`EffectiveConfig` for one invocation.

    Parameters
    ----------
    flags:
        Parsed command-line values keyed by flag name (``appId``,
        ``authoringKey``…).  ``None`` means the flag was not given.
    persisted:
        The previously saved configuration object; may be empty.
    environ:
        Environment mapping, usually ``os.environ``.
    """
    values = {
        source.attr: _resolve_field(source, flags, persisted, environ)
        for source in CONFIG_FIELDS
    }
    return EffectiveConfig(**values)


def validate_config(config: EffectiveConfig) -> EffectiveConfig:
    """Ensure the fields every operation needs are present.

    ``app_id`` and ``version_id`` are left alone — whether they are
    needed depends on the operation's route.

    Raises
    ------
    ConfigurationError
        When ``authoringKey`` or ``endpointBasePath`` is missing.
    """
    for source in CONFIG_FIELDS:
        if source.attr not in _REQUIRED_FIELDS:
            continue
        if not getattr(config, source.attr):
            raise ConfigurationError(
                f"Missing required configuration: {source.persisted_key}",
                hint=_INIT_HINT.format(flag=source.flags[-1], env_var=source.env_var),
            )
    return config
