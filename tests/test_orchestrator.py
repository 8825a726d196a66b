"""Tests for the command orchestrator.

The dispatcher is an in-memory fake, the confirmer and file reader are
mocks.  Coverage:
* Resolution / body errors surface before any call is made.
* Delete-application confirmation (decline, accept, quiet).
* ``--wait`` on train and status commands.
* App creation follow-up and ``--msbot`` reshaping.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest
from conftest import FakeDispatcher, status_record

from luis_cli.core.models import EffectiveConfig
from luis_cli.core.orchestrator import CommandOrchestrator, build_msbot_descriptor
from luis_cli.exceptions import ArgumentError, TrainingFailure, TransportError, UserAbort

APP = {"id": "app-1", "name": "Travel", "activeVersion": "0.3", "culture": "en-us"}


def _orchestrator(
    dispatcher: FakeDispatcher,
    *,
    confirm: bool = True,
    read_json: Any = None,
) -> tuple[CommandOrchestrator, MagicMock, MagicMock]:
    confirm_delete = MagicMock(return_value=confirm)
    progress = MagicMock()
    orchestrator = CommandOrchestrator(
        dispatcher,
        read_json=read_json or MagicMock(),
        confirm_delete=confirm_delete,
        on_progress=progress,
        sleep=MagicMock(),
    )
    return orchestrator, confirm_delete, progress


# ---------------------------------------------------------------------------
# Plain dispatch
# ---------------------------------------------------------------------------

class TestDispatch:
    def test_result_returned_unchanged(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"ListApplications": [[APP]]})
        orchestrator, _, _ = _orchestrator(dispatcher)

        assert orchestrator.run(config, "list", ["applications"], {}) == [APP]
        assert dispatcher.call_names == ["ListApplications"]

    def test_unknown_verb_makes_no_call(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher()
        orchestrator, _, _ = _orchestrator(dispatcher)

        with pytest.raises(ArgumentError, match="destroy is not a valid action"):
            orchestrator.run(config, "destroy", ["application"], {})
        assert dispatcher.calls == []

    def test_missing_body_makes_no_call(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher()
        orchestrator, _, _ = _orchestrator(dispatcher)

        with pytest.raises(ArgumentError, match="ModelCreateObject"):
            orchestrator.run(config, "add", ["intent"], {})
        assert dispatcher.calls == []

    def test_synthesized_publish_body_is_sent(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"PublishApplication": [{"isStaging": True}]})
        orchestrator, _, _ = _orchestrator(dispatcher)
        args = {"versionId": "0.2", "staging": True, "region": "westus"}

        orchestrator.run(config, "publish", ["version"], args)

        _name, _args, body = dispatcher.calls[0]
        assert body == {"versionId": "0.2", "isStaging": True, "region": "westus"}

    def test_transport_error_propagates(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"GetVersion": [TransportError("Version not found")]})
        orchestrator, _, _ = _orchestrator(dispatcher)

        with pytest.raises(TransportError, match="Version not found"):
            orchestrator.run(config, "get", ["version"], {})


# ---------------------------------------------------------------------------
# Delete confirmation
# ---------------------------------------------------------------------------

class TestDeleteConfirmation:
    def test_decline_aborts_before_delete(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"GetApplication": [APP]})
        orchestrator, confirm, _ = _orchestrator(dispatcher, confirm=False)

        with pytest.raises(UserAbort):
            orchestrator.run(config, "delete", ["application"], {})

        confirm.assert_called_once_with(APP)
        assert dispatcher.call_names == ["GetApplication"]

    def test_accept_proceeds_to_delete(self, config: EffectiveConfig) -> None:
        deleted = {"code": "Success", "message": "Operation Successful"}
        dispatcher = FakeDispatcher({"GetApplication": [APP], "DeleteApplication": [deleted]})
        orchestrator, confirm, _ = _orchestrator(dispatcher, confirm=True)

        assert orchestrator.run(config, "delete", ["application"], {}) == deleted
        assert dispatcher.call_names == ["GetApplication", "DeleteApplication"]

    def test_quiet_skips_confirmation(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"DeleteApplication": [None]})
        orchestrator, confirm, _ = _orchestrator(dispatcher, confirm=False)

        orchestrator.run(config, "delete", ["application"], {"quiet": True})

        confirm.assert_not_called()
        assert dispatcher.call_names == ["DeleteApplication"]

    def test_other_deletes_not_confirmed(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher()
        orchestrator, confirm, _ = _orchestrator(dispatcher, confirm=False)

        orchestrator.run(config, "delete", ["version"], {})

        confirm.assert_not_called()
        assert dispatcher.call_names == ["DeleteVersion"]

    def test_lookup_uses_flag_app_id(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"GetApplication": [APP]})
        orchestrator, _, _ = _orchestrator(dispatcher, confirm=False)

        with pytest.raises(UserAbort):
            orchestrator.run(config, "delete", ["application"], {"appId": "app-9"})
        assert dispatcher.calls[0][1]["appId"] == "app-9"


# ---------------------------------------------------------------------------
# Training wait
# ---------------------------------------------------------------------------

class TestWait:
    def test_train_with_wait_returns_final_report(self, config: EffectiveConfig) -> None:
        pending = [status_record("a", "Queued"), status_record("b", "Success")]
        done = [status_record("a", "Success"), status_record("b", "Success")]
        dispatcher = FakeDispatcher({
            "TrainVersion": [{"statusId": 9, "status": "Queued"}],
            "GetStatus": [pending, done],
        })
        orchestrator, _, progress = _orchestrator(dispatcher)

        result = orchestrator.run(config, "train", ["version"], {"wait": True})

        assert result == done
        assert dispatcher.call_names == ["TrainVersion", "GetStatus", "GetStatus"]
        assert progress.call_count == 2

    def test_train_without_wait_returns_immediately(self, config: EffectiveConfig) -> None:
        queued = {"statusId": 9, "status": "Queued"}
        dispatcher = FakeDispatcher({"TrainVersion": [queued]})
        orchestrator, _, progress = _orchestrator(dispatcher)

        assert orchestrator.run(config, "train", ["version"], {"wait": False}) == queued
        progress.assert_not_called()

    def test_status_with_wait_polls(self, config: EffectiveConfig) -> None:
        done = [status_record("a", "UpToDate")]
        dispatcher = FakeDispatcher({"GetStatus": [done]})
        orchestrator, _, _ = _orchestrator(dispatcher)

        assert orchestrator.run(config, "get", ["status"], {"wait": True}) == done
        assert dispatcher.call_names == ["GetStatus", "GetStatus"]

    def test_wait_ignored_for_other_operations(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"GetVersion": [{"version": "0.1"}]})
        orchestrator, _, _ = _orchestrator(dispatcher)

        orchestrator.run(config, "get", ["version"], {"wait": True})
        assert dispatcher.call_names == ["GetVersion"]

    def test_training_failure_propagates(self, config: EffectiveConfig) -> None:
        failed = [status_record("intent-1", "Fail", "FewLabels")]
        dispatcher = FakeDispatcher({"GetStatus": [failed]})
        orchestrator, _, _ = _orchestrator(dispatcher)

        with pytest.raises(TrainingFailure, match="intent-1"):
            orchestrator.run(config, "train", ["version"], {"wait": True})


# ---------------------------------------------------------------------------
# Creation follow-up and msbot shaping
# ---------------------------------------------------------------------------

class TestOutputShaping:
    def test_add_application_follows_up_with_get(self, config: EffectiveConfig) -> None:
        body = {"name": "Travel", "culture": "en-us", "initialVersionId": "0.1"}
        dispatcher = FakeDispatcher({"AddApplication": ["new-app"], "GetApplication": [APP]})
        orchestrator, _, _ = _orchestrator(dispatcher, read_json=MagicMock(return_value=body))

        result = orchestrator.run(config, "add", ["application"], {"in": "app.json"})

        assert result == APP
        assert dispatcher.call_names == ["AddApplication", "GetApplication"]
        assert dispatcher.calls[1][1]["appId"] == "new-app"

    def test_import_application_follows_up_with_get(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"ImportApplication": ["imported"], "GetApplication": [APP]})
        orchestrator, _, _ = _orchestrator(
            dispatcher, read_json=MagicMock(return_value={"versionId": "0.1"}),
        )

        orchestrator.run(config, "import", ["application"], {"in": "app.json"})
        assert dispatcher.calls[1][1]["appId"] == "imported"

    def test_unexpected_creation_response(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"AddApplication": [None]})
        orchestrator, _, _ = _orchestrator(dispatcher, read_json=MagicMock(return_value={}))

        with pytest.raises(TransportError):
            orchestrator.run(config, "add", ["application"], {"in": "app.json"})

    def test_msbot_reshapes_new_application(self, config: EffectiveConfig) -> None:
        body = {"name": "Travel", "culture": "en-us", "initialVersionId": "0.1"}
        fresh = {"id": "new-app", "name": "Travel", "activeVersion": None}
        dispatcher = FakeDispatcher({"AddApplication": ["new-app"], "GetApplication": [fresh]})
        orchestrator, _, _ = _orchestrator(dispatcher, read_json=MagicMock(return_value=body))

        result = orchestrator.run(
            config, "add", ["application"], {"in": "app.json", "msbot": True},
        )

        assert result == {
            "type": "luis",
            "name": "Travel",
            "id": "new-app",
            "appId": "new-app",
            "authoringKey": "key-123",
            "subscriptionKey": "key-123",
            "version": "0.1",
        }

    def test_msbot_on_get_application(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"GetApplication": [APP]})
        orchestrator, _, _ = _orchestrator(dispatcher)

        result = orchestrator.run(config, "get", ["application"], {"msbot": True})
        assert result["version"] == "0.3"
        assert result["type"] == "luis"

    def test_msbot_ignored_for_non_application(self, config: EffectiveConfig) -> None:
        dispatcher = FakeDispatcher({"ListApplications": [[APP]]})
        orchestrator, _, _ = _orchestrator(dispatcher)

        assert orchestrator.run(config, "list", ["applications"], {"msbot": True}) == [APP]

    def test_msbot_leaves_update_status_unchanged(self, config: EffectiveConfig) -> None:
        ok = {"code": "Success", "message": "Operation Successful"}
        dispatcher = FakeDispatcher({"UpdateApplication": [ok]})
        orchestrator, _, _ = _orchestrator(
            dispatcher, read_json=MagicMock(return_value={"name": "Renamed"}),
        )

        result = orchestrator.run(
            config, "update", ["application"], {"in": "b.json", "msbot": True},
        )
        assert result == ok

    def test_msbot_leaves_delete_status_unchanged(self, config: EffectiveConfig) -> None:
        ok = {"code": "Success", "message": "Operation Successful"}
        dispatcher = FakeDispatcher({"DeleteApplication": [ok]})
        orchestrator, _, _ = _orchestrator(dispatcher)

        result = orchestrator.run(
            config, "delete", ["application"], {"quiet": True, "msbot": True},
        )
        assert result == ok
        assert dispatcher.call_names == ["DeleteApplication"]


class TestBuildMsbotDescriptor:
    def test_active_version_preferred(self, config: EffectiveConfig) -> None:
        result = build_msbot_descriptor(APP, config, {"initialVersionId": "0.1"})
        assert result["version"] == "0.3"

    def test_falls_back_to_import_version(self, config: EffectiveConfig) -> None:
        result = build_msbot_descriptor({"id": "x", "name": "n"}, config, {"versionId": "0.7"})
        assert result["version"] == "0.7"

    def test_no_body_no_active_version(self, config: EffectiveConfig) -> None:
        result = build_msbot_descriptor({"id": "x", "name": "n"}, config, None)
        assert result["version"] is None
