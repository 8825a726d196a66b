"""Loader for ``--in`` request-body files.

Errors are left unwrapped: a missing file raises ``FileNotFoundError``
and malformed content raises ``json.JSONDecodeError``, both with their
native diagnostics.  The failing path is recorded on the exception as
:data:`INPUT_PATH_ATTR` so the CLI can tell these apart from unrelated
``OSError`` / ``ValueError`` failures.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

INPUT_PATH_ATTR: str = "input_path"


def read_json_file(path: str) -> Any:
    """Read *path* as UTF-8 and parse it as JSON."""
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        setattr(exc, INPUT_PATH_ATTR, path)
        raise


def failed_input_path(exc: BaseException) -> str | None:
    """Return the ``--in`` path *exc* was raised for, if any."""
    return getattr(exc, INPUT_PATH_ATTR, None)
