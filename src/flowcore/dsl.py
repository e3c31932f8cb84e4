# dsl.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from .model import Attempt, StepRun, WorkOrder


def step_run(
    job_id: str,
    *,
    started_at: Optional[datetime] = None,
    finished_at: Optional[datetime] = None,
    exit_code: Optional[int] = None,
    crashed: bool = False,
) -> StepRun:
    """Create a step run record."""
    return StepRun(
        job_id=job_id,
        started_at=started_at,
        finished_at=finished_at,
        exit_code=exit_code,
        crashed=crashed,
    )


def finished(
    job_id: str,
    exit_code: Optional[int] = 0,
    *,
    seconds: float = 1.0,
    crashed: bool = False,
    at: Optional[datetime] = None,
) -> StepRun:
    """
    Shorthand for a completed run.

    Example:
        attempt(finished("extract"), finished("load", exit_code=1))
    """
    start = at or datetime.now(timezone.utc)
    return step_run(
        job_id,
        started_at=start,
        finished_at=start + timedelta(seconds=seconds),
        exit_code=exit_code,
        crashed=crashed,
    )


def running(job_id: str, *, at: Optional[datetime] = None) -> StepRun:
    """Shorthand for a run that has started but not finished."""
    return step_run(job_id, started_at=at or datetime.now(timezone.utc))


def attempt(*runs: StepRun) -> Attempt:
    return Attempt(runs=list(runs))


def work_order(*attempts: Attempt) -> WorkOrder:
    return WorkOrder(attempts=list(attempts))
