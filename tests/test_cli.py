"""CLI tests (click's CliRunner)."""

import importlib
import json

import pytest
from click.testing import CliRunner

from flowcore import settings
from flowcore.cli import cli, load_payload
from flowcore.payloads import AttemptPayload, WorkOrderPayload


@pytest.fixture
def runner():
    return CliRunner()


def _run(job_id, exit_code=0, **extra):
    return {
        "job_id": job_id,
        "started_at": "2024-03-01T12:00:00Z",
        "finished_at": "2024-03-01T12:00:02Z",
        "exit_code": exit_code,
        **extra,
    }


def _write(tmp_path, data, name="runs.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


# -----------------------------------------------------------------------------
# status
# -----------------------------------------------------------------------------
class TestStatusCommand:

    def test_success(self, runner, tmp_path):
        result = runner.invoke(cli, ["status", _write(tmp_path, [_run("extract"), _run("load")])])
        assert result.exit_code == 0
        assert "extract: exit 0 (2.0s)" in result.output
        assert "STATUS (attempt): SUCCESS" in result.output

    def test_failure_exits_nonzero(self, runner, tmp_path):
        result = runner.invoke(cli, ["status", _write(tmp_path, {"runs": [_run("extract", 3)]})])
        assert result.exit_code == 1
        assert "STATUS (attempt): FAILED" in result.output

    def test_crash_from_exit_reason(self, runner, tmp_path):
        data = [_run("extract", 1, exit_reason="crash")]
        result = runner.invoke(cli, ["status", _write(tmp_path, data)])
        assert result.exit_code == 1
        assert "CRASHED" in result.output

    def test_pending_exits_zero(self, runner, tmp_path):
        data = [_run("extract"), {"job_id": "load", "started_at": "2024-03-01T12:00:02Z"}]
        result = runner.invoke(cli, ["status", _write(tmp_path, data)])
        assert result.exit_code == 0
        assert "load: running" in result.output
        assert "PENDING" in result.output

    def test_work_order(self, runner, tmp_path):
        data = {"attempts": [{"runs": [_run("a", 1)]}, {"runs": [_run("a", 0)]}]}
        result = runner.invoke(cli, ["status", _write(tmp_path, data)])
        assert result.exit_code == 0
        assert "Attempt 2" in result.output
        assert "STATUS (work order): SUCCESS" in result.output

    def test_empty_runs_is_reported(self, runner, tmp_path):
        result = runner.invoke(cli, ["status", _write(tmp_path, [])])
        assert result.exit_code == 1
        assert "InvalidInput" in result.output

    def test_invalid_json(self, runner, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        result = runner.invoke(cli, ["status", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_invalid_payload(self, runner, tmp_path):
        result = runner.invoke(cli, ["status", _write(tmp_path, [{"exit_code": 0}])])
        assert result.exit_code == 1
        assert "Invalid run payload" in result.output
        assert "job_id" in result.output

    def test_mixed_naive_and_aware_timestamps(self, runner, tmp_path):
        data = [{"job_id": "a", "started_at": "2024-03-01T12:00:00Z",
                 "finished_at": "2024-03-01T12:00:02", "exit_code": 0}]
        result = runner.invoke(cli, ["status", _write(tmp_path, data)])
        assert result.exit_code == 0
        assert "a: exit 0 (2.0s)" in result.output
        assert "STATUS (attempt): SUCCESS" in result.output

    def test_killed_run_is_crash(self, runner, tmp_path):
        data = [_run("a", None, exit_reason="kill")]
        result = runner.invoke(cli, ["status", _write(tmp_path, data)])
        assert result.exit_code == 1
        assert "CRASHED" in result.output

    def test_reads_stdin(self, runner):
        result = runner.invoke(cli, ["status", "-"], input=json.dumps([_run("a", None)]))
        assert result.exit_code == 1
        assert "TIMED OUT" in result.output


def test_load_payload_shapes():
    assert isinstance(load_payload([]), AttemptPayload)
    assert isinstance(load_payload({"runs": []}), AttemptPayload)
    assert isinstance(load_payload({"attempts": []}), WorkOrderPayload)


# -----------------------------------------------------------------------------
# cron
# -----------------------------------------------------------------------------
class TestCronCommands:

    def test_parse(self, runner):
        result = runner.invoke(cli, ["cron", "parse", "05 00 08 * *"])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "frequency: monthly",
            "minute: 05",
            "hour: 00",
            "monthday: 08",
        ]

    def test_parse_custom(self, runner):
        result = runner.invoke(cli, ["cron", "parse", "--basic", "*/5 * * * *"])
        assert result.output.strip() == "frequency: custom"

    def test_parse_extended(self, runner):
        result = runner.invoke(cli, ["cron", "parse", "--extended", "30 9 * * 1,3"])
        assert result.exit_code == 0
        assert "weekdays: 01,03" in result.output

    def test_parse_with_defaults(self, runner):
        result = runner.invoke(cli, ["cron", "parse", "--defaults", "50 * * * *"])
        assert "frequency: hourly" in result.output
        assert "weekday: 01" in result.output

    def test_build(self, runner):
        result = runner.invoke(cli, ["cron", "build", "--frequency", "hourly", "--minute", "34", "--hour", "05"])
        assert result.exit_code == 0
        assert result.output.strip() == "34 * * * *"

    def test_build_custom_keeps_previous(self, runner):
        result = runner.invoke(cli, ["cron", "build", "--previous", "*/5 * * * *", "--frequency", "custom"])
        assert result.output.strip() == "*/5 * * * *"

    def test_build_specific_months(self, runner):
        result = runner.invoke(cli, [
            "cron", "build", "--frequency", "specific_months",
            "--minute", "00", "--hour", "06", "--monthday", "15", "--months", "1,6",
        ])
        assert result.output.strip() == "00 06 15 1,6 *"

    def test_build_rejects_unknown_frequency(self, runner):
        result = runner.invoke(cli, ["cron", "build", "--frequency", "yearly"])
        assert result.exit_code == 2

    def test_options(self, runner):
        result = runner.invoke(cli, ["cron", "options"])
        assert result.exit_code == 0
        assert "Every hour=hourly" in result.output
        assert "Sunday=07" in result.output


def test_debug_output(runner):
    result = runner.invoke(cli, ["--debug", "cron", "parse", "50 * * * *"])
    assert result.exit_code == 0
    assert "[DEBUG]" in result.output


# -----------------------------------------------------------------------------
# settings
# -----------------------------------------------------------------------------
def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("FLOWCORE_DEBUG", "true")
    monkeypatch.setenv("FLOWCORE_CRON_EXTENDED", "1")
    monkeypatch.setenv("FLOWCORE_PREVIOUS_CRON", "*/5 * * * *")
    try:
        reloaded = importlib.reload(settings)
        assert reloaded.DEBUG is True
        assert reloaded.CRON_EXTENDED is True
        assert reloaded.PREVIOUS_CRON == "*/5 * * * *"
    finally:
        monkeypatch.undo()
        importlib.reload(settings)


def test_settings_defaults(monkeypatch):
    for name in ("FLOWCORE_DEBUG", "FLOWCORE_CRON_EXTENDED", "FLOWCORE_PREVIOUS_CRON"):
        monkeypatch.delenv(name, raising=False)
    reloaded = importlib.reload(settings)
    assert reloaded.DEBUG is False
    assert reloaded.CRON_EXTENDED is False
    assert reloaded.PREVIOUS_CRON == "0 0 * * *"
