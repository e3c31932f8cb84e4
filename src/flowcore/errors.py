# errors.py
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FlowcoreError(Exception):
    """
    Structured error with enough context for:
      - clean CLI output
      - debugging without full tracebacks
    """
    kind: str
    message: str
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


@dataclass
class InvalidInput(FlowcoreError):
    """Caller error: the input can't be reduced to a status."""
    kind: str = "InvalidInput"
    message: str = "invalid input"
