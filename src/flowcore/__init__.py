from .model import Status, Frequency, StepRun, Attempt, WorkOrder, CronFrequencyDescriptor
from .errors import FlowcoreError, InvalidInput
from .status import aggregate, rollup_work_order, is_final, status_label
from .cron import parse, build, with_form_defaults, form_options
from .dsl import step_run, finished, running, attempt, work_order

__all__ = [
    "Status", "Frequency", "StepRun", "Attempt", "WorkOrder", "CronFrequencyDescriptor",
    "FlowcoreError", "InvalidInput",
    "aggregate", "rollup_work_order", "is_final", "status_label",
    "parse", "build", "with_form_defaults", "form_options",
    "step_run", "finished", "running", "attempt", "work_order",
]
