"""Block until a version's training reaches a terminal state.

Each round fetches the status report and classifies the per-model
records:

* any ``Fail`` aborts with :class:`~luis_cli.exceptions.TrainingFailure`;
* ``Success`` / ``UpToDate`` count as trained;
* the first ``InProgress`` / ``Queued`` model ends the round as
  not-yet-trained (remaining models are not counted).

There is no iteration cap and no deadline: the loop ends only when the
service reports every model trained or one model failed.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from luis_cli.core.models import ModelTrainingStatus, TrainingStatus
from luis_cli.exceptions import TransportError, TrainingFailure

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS: int = 1000
"""Fixed delay between status rounds."""

TRAINED_STATUSES: frozenset[str] = frozenset(
    {TrainingStatus.SUCCESS.value, TrainingStatus.UP_TO_DATE.value}
)

ProgressCallback = Callable[[int, int], None]


def parse_report(report: Any) -> list[ModelTrainingStatus]:
    """Convert a raw status report into :class:`ModelTrainingStatus` records."""
    if not isinstance(report, list):
        raise TransportError(
            "Unexpected training status response: expected a list of models.",
        )
    return [
        ModelTrainingStatus.from_record(entry)
        for entry in report
        if isinstance(entry, dict)
    ]


def count_trained(models: list[ModelTrainingStatus]) -> tuple[int, bool]:
    """Classify one round.

    Returns
    -------
    tuple[int, bool]
        ``(trained, complete)`` where *complete* is ``True`` only when
        every model is trained.

    Raises
    ------
    TrainingFailure
        If any model reports ``Fail``, wherever it sits in the report.
    """
    for model in models:
        if model.status == TrainingStatus.FAIL.value:
            raise TrainingFailure(model.model_id, model.failure_reason)

    trained = 0
    for model in models:
        if model.status not in TRAINED_STATUSES:
            # First non-terminal model short-circuits the round.
            return trained, False
        trained += 1
    return trained, True


class TrainingPoller:
    """Repeatedly fetch training status until all models are trained.

    Parameters
    ----------
    fetch_status:
        Zero-argument callable returning the raw status report.  Its
        errors propagate immediately.
    on_progress:
        Optional callback invoked with ``(trained, total)`` every round.
    sleep:
        Delay function taking seconds; injectable for tests.
    interval_ms:
        Delay between rounds.
    """

    def __init__(
        self,
        fetch_status: Callable[[], Any],
        *,
        on_progress: ProgressCallback | None = None,
        sleep: Callable[[float], None] = time.sleep,
        interval_ms: int = POLL_INTERVAL_MS,
    ) -> None:
        self._fetch_status = fetch_status
        self._on_progress = on_progress
        self._sleep = sleep
        self._interval_ms = interval_ms

    def wait(self) -> Any:
        """Poll until done and return the final raw status report."""
        rounds = 0
        while True:
            rounds += 1
            report = self._fetch_status()
            models = parse_report(report)
            trained, complete = count_trained(models)
            logger.debug(
                "Training round %d: %d/%d trained", rounds, trained, len(models),
            )

            if self._on_progress is not None:
                self._on_progress(trained, len(models))

            if complete:
                return report

            self._sleep(self._interval_ms / 1000)
