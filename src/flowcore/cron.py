# cron.py
from __future__ import annotations

import re
from typing import Optional

from .model import CronFrequencyDescriptor, Frequency

# ---------------------------------------------------------------------
# Recognised shapes (first match wins)
# ---------------------------------------------------------------------

_BASIC_RULES: list[tuple[Frequency, re.Pattern[str]]] = [
    (Frequency.HOURLY, re.compile(r"^(?P<minute>\d{1,2}) \* \* \* \*$")),
    (Frequency.DAILY, re.compile(r"^(?P<minute>\d{1,2}) (?P<hour>\d{1,2}) \* \* \*$")),
    (Frequency.WEEKLY, re.compile(r"^(?P<minute>\d{1,2}) (?P<hour>\d{1,2}) \* \* (?P<weekday>\d{1,2})$")),
    (Frequency.MONTHLY, re.compile(r"^(?P<minute>\d{1,2}) (?P<hour>\d{1,2}) (?P<monthday>\d{1,2}) \* \*$")),
]

_EVERY_N_MINUTES = re.compile(r"^\*/(?P<interval>\d+) \* \* \* \*$")
_EVERY_N_HOURS = re.compile(r"^0 \*/(?P<interval>\d+) \* \* \*$")
_WEEKDAYS = re.compile(r"^(?P<minute>\d{1,2}) (?P<hour>\d{1,2}) \* \* 1-5$")
_MULTI_WEEKLY = re.compile(r"^(?P<minute>\d{1,2}) (?P<hour>\d{1,2}) \* \* (?P<weekdays>\d{1,2}(?:,\d{1,2})+)$")
_SPECIFIC_MONTHS = re.compile(
    r"^(?P<minute>\d{1,2}) (?P<hour>\d{1,2}) (?P<monthday>\d{1,2}) "
    r"(?P<months>\d{1,2}(?:-\d{1,2})?(?:,\d{1,2}(?:-\d{1,2})?)*) \*$"
)

FORM_DEFAULTS = {
    "frequency": Frequency.DAILY,
    "minute": "00",
    "hour": "00",
    "weekday": "01",
    "monthday": "01",
}

DEFAULT_MINUTE_INTERVAL = "15"
DEFAULT_HOUR_INTERVAL = "6"


def _pad(value: str) -> str:
    return value.rjust(2, "0")


def _padded(match: re.Match[str], *names: str) -> dict[str, str]:
    return {name: _pad(match.group(name)) for name in names}


def _expand_months(spec: str) -> Optional[tuple[str, ...]]:
    # "1,3-5" -> ("1", "3", "4", "5"); None unless every month is 1..12
    out: list[str] = []
    for part in spec.split(","):
        lo, _, hi = part.partition("-")
        lo_n = int(lo)
        hi_n = int(hi) if hi else lo_n
        if not 1 <= lo_n <= hi_n <= 12:
            return None
        out.extend(str(i) for i in range(lo_n, hi_n + 1))
    return tuple(out)


def _valid_interval(value: Optional[str]) -> bool:
    return value is not None and value.isdigit() and len(value) <= 4 and int(value) > 0


# ---------------------------------------------------------------------
# parse
# ---------------------------------------------------------------------

def _parse_extended(expr: str) -> Optional[CronFrequencyDescriptor]:
    m = _EVERY_N_MINUTES.match(expr)
    if m and _valid_interval(m.group("interval")):
        return CronFrequencyDescriptor(frequency=Frequency.EVERY_N_MINUTES, interval=m.group("interval"))

    m = _EVERY_N_HOURS.match(expr)
    if m and _valid_interval(m.group("interval")):
        return CronFrequencyDescriptor(frequency=Frequency.EVERY_N_HOURS, interval=m.group("interval"))

    m = _WEEKDAYS.match(expr)
    if m:
        return CronFrequencyDescriptor(frequency=Frequency.WEEKDAYS, **_padded(m, "minute", "hour"))

    m = _MULTI_WEEKLY.match(expr)
    if m:
        return CronFrequencyDescriptor(
            frequency=Frequency.WEEKLY,
            weekdays=tuple(_pad(d) for d in m.group("weekdays").split(",")),
            **_padded(m, "minute", "hour"),
        )

    m = _SPECIFIC_MONTHS.match(expr)
    months = _expand_months(m.group("months")) if m else None
    if months:
        return CronFrequencyDescriptor(
            frequency=Frequency.SPECIFIC_MONTHS,
            months=months,
            **_padded(m, "minute", "hour", "monthday"),
        )

    return None


def parse(expr: Optional[str], *, extended: bool = False) -> CronFrequencyDescriptor:
    """
    Turn a cron expression into a frequency descriptor.

    Never raises: `None` gives the empty descriptor and anything that isn't
    one of the recognised shapes comes back as `custom` with no other fields.
    With `extended=True` interval, weekday-range and month-list shapes are
    recognised too.
    """
    if expr is None:
        return CronFrequencyDescriptor()
    if not isinstance(expr, str):
        return CronFrequencyDescriptor(frequency=Frequency.CUSTOM)

    if extended:
        found = _parse_extended(expr)
        if found is not None:
            return found

    for frequency, rule in _BASIC_RULES:
        m = rule.match(expr)
        if m:
            return CronFrequencyDescriptor(frequency=frequency, **_padded(m, *rule.groupindex))

    return CronFrequencyDescriptor(frequency=Frequency.CUSTOM)


# ---------------------------------------------------------------------
# build
# ---------------------------------------------------------------------

def _coerce_frequency(value: object) -> Optional[Frequency]:
    try:
        return Frequency(value)
    except (TypeError, ValueError):
        return None


def _interval(descriptor: CronFrequencyDescriptor, default: str) -> str:
    value = descriptor.interval
    return str(value) if _valid_interval(None if value is None else str(value)) else default


def build(previous_expr: str, descriptor: CronFrequencyDescriptor) -> str:
    """
    Turn a descriptor back into a cron expression.

    `custom` (and any frequency we don't know) keeps `previous_expr` as is.
    Fields that don't belong to the frequency are ignored; a missing field
    that does belong renders as `*`.
    """
    frequency = _coerce_frequency(descriptor.frequency)

    def f(name: str) -> str:
        value = getattr(descriptor, name)
        return "*" if value in (None, "") else str(value)

    if frequency is Frequency.HOURLY:
        return f"{f('minute')} * * * *"
    if frequency is Frequency.DAILY:
        return f"{f('minute')} {f('hour')} * * *"
    if frequency is Frequency.WEEKLY:
        if descriptor.weekdays:
            return f"{f('minute')} {f('hour')} * * {','.join(descriptor.weekdays)}"
        return f"{f('minute')} {f('hour')} * * {f('weekday')}"
    if frequency is Frequency.MONTHLY:
        return f"{f('minute')} {f('hour')} {f('monthday')} * *"
    if frequency is Frequency.EVERY_N_MINUTES:
        return f"*/{_interval(descriptor, DEFAULT_MINUTE_INTERVAL)} * * * *"
    if frequency is Frequency.EVERY_N_HOURS:
        return f"0 */{_interval(descriptor, DEFAULT_HOUR_INTERVAL)} * * *"
    if frequency is Frequency.WEEKDAYS:
        return f"{f('minute')} {f('hour')} * * 1-5"
    if frequency is Frequency.SPECIFIC_MONTHS:
        months = ",".join(descriptor.months) if descriptor.months else "1"
        return f"{f('minute')} {f('hour')} {f('monthday')} {months} *"

    return previous_expr


# ---------------------------------------------------------------------
# Trigger form helpers
# ---------------------------------------------------------------------

def with_form_defaults(descriptor: CronFrequencyDescriptor) -> CronFrequencyDescriptor:
    """Fill the fields the trigger form always shows; present values win."""
    filled = {
        name: getattr(descriptor, name) if getattr(descriptor, name) is not None else default
        for name, default in FORM_DEFAULTS.items()
    }
    return CronFrequencyDescriptor(
        interval=descriptor.interval,
        weekdays=descriptor.weekdays,
        months=descriptor.months,
        **filled,
    )


def _two_digit_range(start: int, stop: int) -> list[str]:
    return [f"{i:02d}" for i in range(start, stop + 1)]


def form_options() -> dict[str, object]:
    """Select options for the trigger form: label -> value pairs or plain values."""
    return {
        "frequencies": [
            ("Every hour", Frequency.HOURLY.value),
            ("Every day", Frequency.DAILY.value),
            ("Every week", Frequency.WEEKLY.value),
            ("Every month", Frequency.MONTHLY.value),
            ("Custom", Frequency.CUSTOM.value),
        ],
        "minutes": _two_digit_range(0, 59),
        "hours": _two_digit_range(0, 23),
        "weekdays": [
            ("Monday", "01"),
            ("Tuesday", "02"),
            ("Wednesday", "03"),
            ("Thursday", "04"),
            ("Friday", "05"),
            ("Saturday", "06"),
            ("Sunday", "07"),
        ],
        "monthdays": _two_digit_range(1, 31),
    }
