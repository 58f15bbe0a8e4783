"""Tests for the mapsync command line.

Drives main() with injected stores, prompters and handlers and checks
exit codes plus stdout/stderr. Logging configuration is stubbed and log
output discarded.
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest
import structlog

from src.mapsync import cli
from src.mapsync.cli import ExitCode, main
from src.mapsync.commands.prompter import InteractivePrompter
from src.mapsync.config import get_settings
from src.mapsync.mappings.schemas import SyncDirection
from src.mapsync.mappings.storage import InMemoryMappingStore


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    """Swallow log output so stdout holds only command results."""
    monkeypatch.setattr(cli, "configure_structlog", lambda level=None: None)
    structlog.configure(logger_factory=structlog.ReturnLoggerFactory())


@pytest.fixture
def prompter():
    return MagicMock(spec=InteractivePrompter)


@pytest.fixture
def handler():
    return MagicMock()


def run(argv, capsys, **kwargs):
    code = main(argv, **kwargs)
    captured = capsys.readouterr()
    return code, captured.out, captured.err


# ── push / pull ───────────────────────────────────────────────────────────


class TestSyncCommands:
    """Test push and pull verbs."""

    def test_push_all_non_interactive(self, scenario_store, handler, capsys):
        code, out, err = run(
            ["-n", "--format", "json", "push", "all"], capsys, store=scenario_store, handler=handler
        )

        assert code == ExitCode.OK
        assert json.loads(out) == [
            {"mapping": "A", "direction": "push", "status": "dispatched", "detail": ""}
        ]
        assert err == ""
        handler.assert_called_once_with(scenario_store.load("A"), SyncDirection.PUSH)

    def test_pull_named(self, scenario_store, handler, capsys):
        code, out, _ = run(["-n", "pull", "B"], capsys, store=scenario_store, handler=handler)

        assert code == ExitCode.OK
        assert "B" in out and "dispatched" in out

    def test_direction_mismatch_exits_nonzero(self, scenario_store, handler, capsys):
        code, out, err = run(["-n", "push", "B"], capsys, store=scenario_store, handler=handler)

        assert code == ExitCode.ERROR
        assert out == ""
        assert "Mapping B does not push." in err
        handler.assert_not_called()

    def test_not_found_exits_nonzero(self, scenario_store, handler, capsys):
        code, _, err = run(["-n", "pull", "C"], capsys, store=scenario_store, handler=handler)

        assert code == ExitCode.ERROR
        assert "Mapping C does not exist." in err

    def test_empty_result_exits_nonzero(self, handler, capsys):
        code, _, err = run(["-n", "push", "ALL"], capsys, store=InMemoryMappingStore(), handler=handler)

        assert code == ExitCode.ERROR
        assert "No push mappings matched" in err

    def test_missing_selector_non_interactive(self, scenario_store, capsys):
        code, _, err = run(["-n", "push"], capsys, store=scenario_store)

        assert code == ExitCode.ERROR
        assert "required" in err

    def test_handler_errors_exit_nonzero(self, scenario_store, capsys):
        failing = MagicMock(side_effect=RuntimeError("down"))

        code, out, _ = run(["-n", "--format", "csv", "push", "A"], capsys, store=scenario_store, handler=failing)

        assert code == ExitCode.ERROR
        assert "error" in out
        assert "down" in out

    def test_interactive_prompts_for_missing_selector(self, scenario_store, prompter, handler, capsys):
        prompter.choose.return_value = "ALL"

        code, _, _ = run(["pull"], capsys, store=scenario_store, prompter=prompter, handler=handler)

        assert code == ExitCode.OK
        message, options = prompter.choose.call_args.args
        assert message == "Choose a mapping to pull"
        assert options == {"B": "B", "ALL": "All pull mappings"}
        handler.assert_called_once_with(scenario_store.load("B"), SyncDirection.PULL)

    def test_interactive_reprompts_on_mismatch(self, scenario_store, prompter, handler, capsys):
        """An unusable name in interactive mode leads to a prompt, not an error."""
        prompter.choose.return_value = "A"

        code, _, _ = run(["push", "B"], capsys, store=scenario_store, prompter=prompter, handler=handler)

        assert code == ExitCode.OK
        handler.assert_called_once_with(scenario_store.load("A"), SyncDirection.PUSH)

    def test_interactive_abort(self, scenario_store, prompter, handler, capsys):
        prompter.choose.return_value = None

        code, out, err = run(["push"], capsys, store=scenario_store, prompter=prompter, handler=handler)

        assert code == ExitCode.ABORTED
        assert out == ""
        assert "Cancelled." in err
        handler.assert_not_called()


# ── list-mappings / describe-object ───────────────────────────────────────


class TestListAndDescribe:
    """Test read-only verbs."""

    def test_list_all(self, mixed_store, capsys):
        code, out, _ = run(["--format", "json", "list-mappings"], capsys, store=mixed_store)

        assert code == ExitCode.OK
        assert [m["name"] for m in json.loads(out)] == ["contact", "account", "lead", "archive"]

    def test_list_pull_only(self, mixed_store, capsys):
        code, out, _ = run(["--format", "json", "list-mappings", "--direction", "pull"], capsys, store=mixed_store)

        assert code == ExitCode.OK
        assert [m["name"] for m in json.loads(out)] == ["contact", "lead"]

    def test_describe_object(self, mixed_store, capsys):
        code, out, _ = run(["-n", "--format", "json", "describe-object", "Contact"], capsys, store=mixed_store)

        assert code == ExitCode.OK
        assert [m["name"] for m in json.loads(out)] == ["contact", "lead"]

    def test_describe_object_prompts(self, mixed_store, prompter, capsys):
        prompter.choose.return_value = "Account"

        code, out, _ = run(["--format", "json", "describe-object"], capsys, store=mixed_store, prompter=prompter)

        assert code == ExitCode.OK
        assert [m["name"] for m in json.loads(out)] == ["account"]

    def test_describe_unknown_object(self, mixed_store, capsys):
        code, _, err = run(["-n", "describe-object", "Opportunity"], capsys, store=mixed_store)

        assert code == ExitCode.ERROR
        assert "Opportunity" in err


# ── Mapping file loading ──────────────────────────────────────────────────


class TestMappingsFile:
    """Test the default JSON store path."""

    def test_reads_mappings_file(self, tmp_path, capsys):
        path = tmp_path / "mappings.json"
        path.write_text(json.dumps({"mappings": [{"name": "contact", "supports_push": True}]}))

        code, out, _ = run(
            ["--mappings-file", str(path), "-n", "--format", "json", "list-mappings"], capsys
        )

        assert code == ExitCode.OK
        assert json.loads(out)[0]["name"] == "contact"

    def test_missing_mappings_file(self, tmp_path, capsys):
        code, _, err = run(["--mappings-file", str(tmp_path / "none.json"), "-n", "push", "ALL"], capsys)

        assert code == ExitCode.ERROR
        assert "Mappings file not found" in err

    def test_mappings_path_is_directory(self, tmp_path, handler, capsys):
        code, out, err = run(
            ["--mappings-file", str(tmp_path), "-n", "push", "ALL"], capsys, handler=handler
        )

        assert code == ExitCode.ERROR
        assert out == ""
        assert "could not be read" in err
        handler.assert_not_called()

    def test_mappings_file_not_utf8(self, tmp_path, handler, capsys):
        path = tmp_path / "mappings.json"
        path.write_bytes(b'{"mappings": [{"name": "\xff\xfe"}]}')

        code, _, err = run(["--mappings-file", str(path), "-n", "push", "ALL"], capsys, handler=handler)

        assert code == ExitCode.ERROR
        assert "not valid UTF-8" in err


# ── Settings ──────────────────────────────────────────────────────────────


class TestSettingsErrors:
    """Invalid environment settings are reported before any dispatch."""

    @pytest.fixture(autouse=True)
    def _fresh_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_invalid_output_format(self, monkeypatch, scenario_store, handler, capsys):
        monkeypatch.setenv("OUTPUT_FORMAT", "xml")

        code, out, err = run(["-n", "push", "ALL"], capsys, store=scenario_store, handler=handler)

        assert code == ExitCode.ERROR
        assert out == ""
        assert "invalid settings" in err
        assert "OUTPUT_FORMAT" in err
        handler.assert_not_called()

    def test_output_format_from_environment(self, monkeypatch, scenario_store, handler, capsys):
        monkeypatch.setenv("OUTPUT_FORMAT", "json")

        code, out, _ = run(["-n", "push", "ALL"], capsys, store=scenario_store, handler=handler)

        assert code == ExitCode.OK
        assert json.loads(out)[0]["mapping"] == "A"
