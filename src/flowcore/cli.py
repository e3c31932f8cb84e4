# cli.py
from __future__ import annotations

import json
import sys

import click
from pydantic import ValidationError

from flowcore import settings
from flowcore.cron import build, form_options, parse, with_form_defaults
from flowcore.errors import FlowcoreError
from flowcore.model import CronFrequencyDescriptor, Frequency, Status
from flowcore.payloads import AttemptPayload, WorkOrderPayload
from flowcore.ui.console import Console, get_console, set_console

FAILED_STATUSES = {Status.FAILURE, Status.TIMEOUT, Status.CRASH}


def load_payload(data: object) -> AttemptPayload | WorkOrderPayload:
    """
    Accept the three shapes a runs file can take:
      - a bare list of runs
      - an attempt: {"runs": [...]}
      - a work order: {"attempts": [{"runs": [...]}, ...]}
    """
    if isinstance(data, list):
        return AttemptPayload.model_validate({"runs": data})
    if isinstance(data, dict) and "attempts" in data:
        return WorkOrderPayload.model_validate(data)
    return AttemptPayload.model_validate(data)


def _split(value: str | None) -> tuple[str, ...] | None:
    if not value:
        return None
    return tuple(v.strip() for v in value.split(",") if v.strip())


@click.group()
@click.option(
    "--debug/--no-debug",
    default=settings.DEBUG,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """flowcore: run status rollups and cron trigger helpers."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("runs_file", type=click.File("r"))
@click.pass_context
def status(ctx, runs_file):
    """Print the rollup status of a runs file (JSON, '-' for stdin)."""
    console = get_console()
    
    try:
        payload = load_payload(json.load(runs_file))
        
        if isinstance(payload, WorkOrderPayload):
            order = payload.to_work_order()
            console.print_debug(f"Loaded work order with {len(order.attempts)} attempt(s)")
            for n, att in enumerate(order.attempts, start=1):
                console.print_header(f"Attempt {n}")
                for i, run in enumerate(att.runs, start=1):
                    console.print_run(i, run)
            result = order.status
            console.print_status(result, scope="work order")
        else:
            att = payload.to_attempt()
            console.print_debug(f"Loaded attempt with {len(att.runs)} run(s)")
            console.print_header("Runs")
            for i, run in enumerate(att.runs, start=1):
                console.print_run(i, run)
            result = att.status
            console.print_status(result)
    
    except json.JSONDecodeError as e:
        console.print_error(
            "Invalid JSON",
            f"Could not parse {runs_file.name}",
            details=[str(e)],
        )
        sys.exit(1)
    except ValidationError as e:
        console.print_error(
            "Invalid run payload",
            f"{runs_file.name} does not describe runs, an attempt or a work order",
            details=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()],
        )
        sys.exit(1)
    except FlowcoreError as e:
        console.print_error(e.kind, e.message, details=[f"{k}={v}" for k, v in e.details.items()])
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    if result in FAILED_STATUSES:
        sys.exit(1)


@cli.group()
def cron():
    """Convert between cron expressions and trigger form fields."""


@cron.command("parse")
@click.argument("expression")
@click.option(
    "--extended/--basic",
    default=settings.CRON_EXTENDED,
    show_default=True,
    help="Also recognise interval, weekday-range and month-list expressions",
)
@click.option("--defaults", is_flag=True, default=False, help="Fill in the trigger form defaults")
def parse_cmd(expression, extended, defaults):
    """Show the frequency fields for EXPRESSION."""
    console = get_console()
    descriptor = parse(expression, extended=extended)
    if defaults:
        descriptor = with_form_defaults(descriptor)
    console.print_debug(f"parse({expression!r}, extended={extended}) -> {descriptor.frequency}")
    console.print_descriptor(descriptor)


@cron.command("build")
@click.option("--previous", default=settings.PREVIOUS_CRON, show_default=True, help="Expression kept for custom")
@click.option(
    "--frequency",
    required=True,
    type=click.Choice([f.value for f in Frequency]),
    help="Target frequency",
)
@click.option("--minute", default=None)
@click.option("--hour", default=None)
@click.option("--weekday", default=None)
@click.option("--monthday", default=None)
@click.option("--interval", default=None, help="Interval for every_n_minutes / every_n_hours")
@click.option("--weekdays", default=None, help="Comma separated weekdays for weekly")
@click.option("--months", default=None, help="Comma separated months for specific_months")
def build_cmd(previous, frequency, minute, hour, weekday, monthday, interval, weekdays, months):
    """Print the cron expression for the given form fields."""
    console = get_console()
    descriptor = CronFrequencyDescriptor(
        frequency=Frequency(frequency),
        minute=minute,
        hour=hour,
        weekday=weekday,
        monthday=monthday,
        interval=interval,
        weekdays=_split(weekdays),
        months=_split(months),
    )
    console.print_expression(build(previous, descriptor))


@cron.command("options")
def options_cmd():
    """List the values the trigger form offers."""
    get_console().print_options(form_options())


def main() -> None:
    try:
        cli(obj={})
    except KeyboardInterrupt:
        get_console().print_info("\nInterrupted by user")
        sys.exit(130)


if __name__ == "__main__":
    main()
