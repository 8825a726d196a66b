"""Infrastructure layer — external system integration.

This layer wraps all interaction with the LUIS HTTP API and the local
filesystem.  Every raw ``httpx`` exception is caught here and re-raised
as a :class:`~luis_cli.exceptions.LuisCliError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from luis_cli.infra.config_store import load_persisted_config
from luis_cli.infra.http_dispatcher import HttpDispatcher
from luis_cli.infra.input_file import failed_input_path, read_json_file

__all__: list[str] = [
    "HttpDispatcher",
    "failed_input_path",
    "load_persisted_config",
    "read_json_file",
]
