# payloads.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .model import Attempt, StepRun, WorkOrder

ExitReason = Literal["success", "fail", "crash", "cancel", "kill", "exception", "lost"]

# reasons the supervisor reports for a step that died from a fault
CRASH_REASONS = {"crash", "kill", "exception"}

# exit code implied by a reason when the worker didn't send one
IMPLIED_EXIT_CODES = {"success": 0, "fail": 1, "cancel": 1}


class StepRunPayload(BaseModel):
    """
    A step run as reported by a worker.

    Naive timestamps are taken as UTC. `exit_reason` refines the record:
      - crash, kill, exception -> crashed
      - lost                   -> finished with no exit code (timeout)
      - cancel                 -> failure (exit code 1 unless given)
      - success / fail         -> exit code 0 / 1 unless given
    """
    job_id: str
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    exit_code: Optional[int] = None
    crashed: bool = False
    exit_reason: Optional[ExitReason] = None

    @field_validator("started_at", "finished_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> "StepRunPayload":
        if self.finished_at is not None:
            if self.started_at is None:
                raise ValueError("finished_at requires started_at")
            if self.finished_at < self.started_at:
                raise ValueError("finished_at is before started_at")

        reason, code = self.exit_reason, self.exit_code
        if reason == "success" and code not in (None, 0):
            raise ValueError(f"exit_reason 'success' contradicts exit_code {code}")
        if reason in ("fail", "cancel") and code == 0:
            raise ValueError(f"exit_reason {reason!r} contradicts exit_code 0")
        if reason == "lost" and code is not None:
            raise ValueError("exit_reason 'lost' can't carry an exit_code")
        return self

    def to_step_run(self) -> StepRun:
        exit_code = self.exit_code
        if exit_code is None and self.exit_reason in IMPLIED_EXIT_CODES:
            exit_code = IMPLIED_EXIT_CODES[self.exit_reason]
        return StepRun(
            job_id=self.job_id,
            started_at=self.started_at,
            finished_at=self.finished_at,
            exit_code=exit_code,
            crashed=self.crashed or self.exit_reason in CRASH_REASONS,
        )


class AttemptPayload(BaseModel):
    runs: list[StepRunPayload] = Field(default_factory=list)

    def to_attempt(self) -> Attempt:
        return Attempt(runs=[r.to_step_run() for r in self.runs])


class WorkOrderPayload(BaseModel):
    attempts: list[AttemptPayload] = Field(default_factory=list)

    def to_work_order(self) -> WorkOrder:
        return WorkOrder(attempts=[a.to_attempt() for a in self.attempts])
