"""Regression tests for optional CLI UI dependencies (rich/questionary).

These tests verify bootstrap commands are resilient when optional UI
packages are missing, and the delete confirmation fails cleanly only
when the prompt is actually needed.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from conftest import FakeDispatcher

from luis_cli.cli import app as app_module
from luis_cli.cli import exit_codes
from luis_cli.cli.app import main
from luis_cli.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


@pytest.fixture
def configured(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".luisrc").write_text(
        json.dumps({"appId": "a", "authoringKey": "k", "endpointBasePath": "https://e"}),
        encoding="utf-8",
    )
    return tmp_path


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_commands_work_without_rich(
    configured: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setattr(
        app_module, "_build_dispatcher", lambda: FakeDispatcher({"ListApplications": [[]]}),
    )

    code = main(["list", "applications", "--verbose"])

    assert code == exit_codes.SUCCESS
    assert json.loads(capsys.readouterr().out) == []


def test_delete_errors_cleanly_when_questionary_missing(
    configured: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_questionary(monkeypatch)
    dispatcher = FakeDispatcher({"GetApplication": [{"id": "a", "name": "Travel"}]})
    monkeypatch.setattr(app_module, "_build_dispatcher", lambda: dispatcher)

    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        main(["delete", "application"])
    assert dispatcher.call_names == ["GetApplication"]


def test_quiet_delete_needs_no_questionary(
    configured: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_questionary(monkeypatch)
    dispatcher = FakeDispatcher()
    monkeypatch.setattr(app_module, "_build_dispatcher", lambda: dispatcher)

    assert main(["delete", "application", "-q"]) == exit_codes.SUCCESS
    assert dispatcher.call_names == ["DeleteApplication"]
