# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class Status(str, Enum):
    """Rollup status of an attempt (or a work order)."""
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"
    CRASH = "crash"


class Frequency(str, Enum):
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"

    # only produced by parse(..., extended=True)
    EVERY_N_MINUTES = "every_n_minutes"
    EVERY_N_HOURS = "every_n_hours"
    WEEKDAYS = "weekdays"
    SPECIFIC_MONTHS = "specific_months"


@dataclass(frozen=True)
class StepRun:
    """The record of one step's execution within an attempt."""
    job_id: str
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    exit_code: Optional[int] = None

    # set by the supervisor when the step died from an unhandled fault
    crashed: bool = False

    def __post_init__(self) -> None:
        if self.finished_at is not None and self.started_at is None:
            raise ValueError(f"StepRun {self.job_id!r} has finished_at without started_at")

    @property
    def is_pending(self) -> bool:
        return self.finished_at is None

    @property
    def duration(self) -> Optional[float]:
        if self.started_at is None or self.finished_at is None:
            return None
        try:
            return (self.finished_at - self.started_at).total_seconds()
        except TypeError:
            # naive mixed with aware
            return None


@dataclass
class Attempt:
    """
    One execution pass of a workflow.

    `runs` is kept in execution order; an upstream failure halts the chain,
    so the last run always carries the terminal state.
    """
    runs: list[StepRun] = field(default_factory=list)

    @property
    def status(self) -> Status:
        from .status import aggregate
        return aggregate(self.runs)


@dataclass
class WorkOrder:
    """A unit of work and its attempts (the first run plus any retries)."""
    attempts: list[Attempt] = field(default_factory=list)

    @property
    def status(self) -> Status:
        from .status import rollup_work_order
        return rollup_work_order(self.attempts)


@dataclass(frozen=True)
class CronFrequencyDescriptor:
    """
    Structured, form-friendly view of a cron expression.

    Values are two-digit zero-padded strings. `parse` only populates the
    fields relevant to `frequency`; `build` ignores the rest.
    """
    frequency: Optional[Frequency] = None
    minute: Optional[str] = None
    hour: Optional[str] = None
    weekday: Optional[str] = None
    monthday: Optional[str] = None

    # extended grammar
    interval: Optional[str] = None
    weekdays: Optional[tuple[str, ...]] = None
    months: Optional[tuple[str, ...]] = None

    @property
    def is_empty(self) -> bool:
        return all(v is None for v in self.to_dict().values())

    def to_dict(self) -> dict[str, object]:
        """Populated fields only, with plain string/list values."""
        out: dict[str, object] = {}
        for name in (
            "frequency", "minute", "hour", "weekday", "monthday",
            "interval", "weekdays", "months",
        ):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, Frequency):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            out[name] = value
        return out
