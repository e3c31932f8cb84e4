from __future__ import annotations
import os


def _flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


DEBUG = _flag("FLOWCORE_DEBUG")
CRON_EXTENDED = _flag("FLOWCORE_CRON_EXTENDED")
PREVIOUS_CRON = os.environ.get("FLOWCORE_PREVIOUS_CRON", "0 0 * * *")
