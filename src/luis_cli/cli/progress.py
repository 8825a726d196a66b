"""Training progress display driven by the training poller.

:class:`TrainingProgressReporter` is the ``on_progress`` callback passed
to :class:`~luis_cli.core.training_poller.TrainingPoller`.  It writes one
``trained/total`` line to stderr per poll round, so the output stays
readable when stderr is redirected to a log file.
"""

from __future__ import annotations

from luis_cli.cli.console import console


class TrainingProgressReporter:
    """Callable progress adapter for the training poller.

    Usage::

        reporter = TrainingProgressReporter()
        poller = TrainingPoller(fetch, on_progress=reporter)
    """

    def __init__(self) -> None:
        self._rounds: int = 0

    @property
    def rounds(self) -> int:
        """Number of rounds reported so far."""
        return self._rounds

    def __call__(self, trained: int, total: int) -> None:
        """Report one poll round."""
        self._rounds += 1
        style = "green" if total and trained == total else "yellow"
        console.print(
            f"[bold blue]Training[/bold blue] "
            f"[{style}]{format_ratio(trained, total)}[/{style}] models trained"
        )


def format_ratio(trained: int, total: int) -> str:
    """Render ``"3/5"``; a negative *trained* is clamped to zero."""
    return f"{max(trained, 0)}/{total}"
