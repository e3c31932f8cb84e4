# status.py
from __future__ import annotations

from typing import Iterable

from .errors import InvalidInput
from .model import Attempt, Status, StepRun

STATUS_LABELS = {
    Status.PENDING: "Pending",
    Status.SUCCESS: "Success",
    Status.FAILURE: "Failed",
    Status.TIMEOUT: "Timed out",
    Status.CRASH: "Crashed",
}


def aggregate(runs: Iterable[StepRun]) -> Status:
    """
    Reduce an attempt's step runs to one rollup status.

    Only the last run (in execution order) is inspected:
      - not finished            -> pending
      - finished, crashed       -> crash
      - finished, no exit code  -> timeout
      - exit code 0             -> success
      - any other exit code     -> failure

    Raises:
        InvalidInput: if `runs` is empty
    """
    runs = list(runs)
    if not runs:
        raise InvalidInput(message="cannot aggregate an empty run sequence")

    last = runs[-1]
    if last.finished_at is None:
        return Status.PENDING
    if last.crashed:
        return Status.CRASH
    if last.exit_code is None:
        return Status.TIMEOUT
    if last.exit_code == 0:
        return Status.SUCCESS
    return Status.FAILURE


def rollup_work_order(attempts: Iterable[Attempt]) -> Status:
    """A work order is as good as its latest attempt."""
    attempts = list(attempts)
    if not attempts:
        raise InvalidInput(message="work order has no attempts")

    latest = attempts[-1]
    try:
        return aggregate(latest.runs)
    except InvalidInput as e:
        raise InvalidInput(
            message="latest attempt has no runs",
            details={"attempt": len(attempts)},
        ) from e


def is_final(status: Status) -> bool:
    return Status(status) is not Status.PENDING


def status_label(status: Status) -> str:
    return STATUS_LABELS[Status(status)]
