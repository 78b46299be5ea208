"""Tests for CLI interface functionality."""

import json
from datetime import date
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from session_planner.main import SessionPlannerCLI, cli_entry_with_args
from session_planner.scheduling.planner import SessionPlanner


@pytest.fixture
def snapshot_file(tmp_path: Path, snapshot_data: dict[str, Any]) -> Path:
    """Snapshot written to disk."""
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data), encoding="utf-8")
    return path


@pytest.fixture
def planner(today: date) -> SessionPlanner:
    return SessionPlanner(today_provider=lambda: today)


@pytest.mark.unit
class TestSessionPlannerCLI:
    """Test cases for the SessionPlannerCLI class."""

    def test_cli_initialization(self) -> None:
        """Test CLI initialization with default parameters."""
        cli = SessionPlannerCLI()

        assert isinstance(cli._planner, SessionPlanner)
        assert cli._as_json is False
        assert cli._show_past is False

    def test_print_plan(
        self, planner: SessionPlanner, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test text output lists each upcoming session with its work."""
        cli = SessionPlannerCLI(planner=planner)

        assert cli.run(str(snapshot_file)) is True

        output = capsys.readouterr().out
        assert "📅 Upcoming sessions as of 2025-11-03" in output
        assert "[0] 2025-11-03 2/2h  Report - Outline, Email" in output
        assert "[1] 2025-11-05 2/2h  Report - Draft" in output
        assert "Past sessions" not in output

    def test_print_plan_with_past(
        self, planner: SessionPlanner, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli = SessionPlannerCLI(planner=planner, show_past=True)

        cli.run(str(snapshot_file))

        output = capsys.readouterr().out
        assert "🕘 Past sessions" in output
        assert "2025-10-30 2h  completed" in output

    def test_print_plan_json(
        self, planner: SessionPlanner, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli = SessionPlannerCLI(planner=planner, as_json=True, show_past=True)

        cli.run(str(snapshot_file))

        payload = json.loads(capsys.readouterr().out)
        assert payload["today"] == "2025-11-03"
        assert [s["session"]["id"] for s in payload["upcoming"]] == ["sess-today", "sess-wed"]
        assert [s["id"] for s in payload["past"]] == ["sess-old"]

    def test_print_summary(
        self, planner: SessionPlanner, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli = SessionPlannerCLI(planner=planner)

        cli.run(str(snapshot_file), summary_index=0)

        assert capsys.readouterr().out.strip() == "Report - Outline, Email, Next: Report - Draft"

    def test_print_completion(
        self, planner: SessionPlanner, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli = SessionPlannerCLI(planner=planner)

        assert cli.run(str(snapshot_file), complete_index=1) is True

        output = capsys.readouterr().out
        assert "✅ Completing session sess-wed" in output
        assert "Tasks to mark completed: s-draft" in output
        assert "Notes: Completed tasks: Report - Draft" in output

    def test_completion_index_out_of_range(
        self, planner: SessionPlanner, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli = SessionPlannerCLI(planner=planner)

        assert cli.run(str(snapshot_file), complete_index=5) is False
        assert "No upcoming session at index 5" in capsys.readouterr().err

    def test_missing_snapshot(
        self, planner: SessionPlanner, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cli = SessionPlannerCLI(planner=planner)

        assert cli.run(str(tmp_path / "missing.json")) is False
        assert "❌ Failed to read snapshot" in capsys.readouterr().err


@pytest.mark.unit
class TestCliEntry:
    """Test the console script entry point."""

    def test_exit_zero_on_success(
        self, snapshot_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with patch("session_planner.main.configure_logging"):
            with pytest.raises(SystemExit) as exc_info:
                cli_entry_with_args([str(snapshot_file), "--today", "2025-11-03", "--summary", "1"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == "Report - Draft"

    def test_exit_one_on_bad_snapshot(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("[]", encoding="utf-8")

        with patch("session_planner.main.configure_logging"):
            with pytest.raises(SystemExit) as exc_info:
                cli_entry_with_args([str(path), "--today", "2025-11-03"])

        assert exc_info.value.code == 1

    def test_unknown_timezone(self, snapshot_file: Path) -> None:
        with patch("session_planner.main.configure_logging"), patch("sys.stderr"):
            with pytest.raises(SystemExit) as exc_info:
                cli_entry_with_args([str(snapshot_file), "--timezone", "Mars/Olympus"])

        assert exc_info.value.code == 2
