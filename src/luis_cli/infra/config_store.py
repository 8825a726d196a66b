"""Read-only access to the persisted ``.luisrc`` configuration file.

The file is written by ``luis --init`` (not part of this package); here
it is only loaded as a flat JSON object.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from luis_cli.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME: str = ".luisrc"


def default_config_path() -> Path:
    """Return ``.luisrc`` in the current working directory."""
    return Path.cwd() / CONFIG_FILENAME


def load_persisted_config(path: Path | None = None) -> dict[str, Any]:
    """Load the persisted configuration object.

    A missing file yields an empty mapping.

    Raises
    ------
    ConfigurationError
        When the file exists but is not a JSON object.
    """
    config_path = path or default_config_path()
    if not config_path.is_file():
        logger.debug("No persisted config at %s", config_path)
        return {}

    try:
        data: Any = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigurationError(
            f"Could not read {config_path}: {exc}",
            hint="Fix or delete the file, then run 'luis --init'.",
        ) from exc

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{config_path} must contain a JSON object.",
            hint="Fix or delete the file, then run 'luis --init'.",
        )

    logger.debug("Loaded persisted config from %s", config_path)
    return data
