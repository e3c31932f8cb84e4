"""Console output formatting utilities for flowcore."""

from __future__ import annotations

import sys
from typing import Optional

from flowcore.model import CronFrequencyDescriptor, Status, StepRun
from flowcore.status import status_label


class Console:
    """Centralized console output formatting."""
    
    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.
        
        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug
    
    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))
    
    def print_run(self, index: int, run: StepRun) -> None:
        """Print one step run line."""
        if run.started_at is None:
            state = "not started"
        elif run.finished_at is None:
            state = "running"
        elif run.crashed:
            state = "crashed"
        elif run.exit_code is None:
            state = "no exit code"
        else:
            state = f"exit {run.exit_code}"
        line = f"  {index}. {run.job_id}: {state}"
        if run.duration is not None:
            line += f" ({run.duration:.1f}s)"
        print(line)
    
    def print_status(self, status: Status, scope: str = "attempt") -> None:
        """Print the rollup status."""
        print(f"\nSTATUS ({scope}): {status_label(status).upper()}")
    
    def print_descriptor(self, descriptor: CronFrequencyDescriptor) -> None:
        """Print descriptor fields, one per line."""
        fields = descriptor.to_dict()
        if not fields:
            print("(empty)")
            return
        for key, value in fields.items():
            if isinstance(value, list):
                value = ",".join(value)
            print(f"{key}: {value}")
    
    def print_expression(self, expr: str) -> None:
        print(expr)
    
    def print_options(self, options: dict[str, object]) -> None:
        """Print trigger form options."""
        for name, values in options.items():
            self.print_header(name)
            rendered = []
            for v in values:
                rendered.append(f"{v[0]}={v[1]}" if isinstance(v, tuple) else v)
            print(" ".join(rendered))
    
    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.
        
        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)
    
    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)
    
    def print_info(self, message: str) -> None:
        """Print informational message."""
        print(message)
    
    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
