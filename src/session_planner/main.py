"""Command-line interface for session planning."""

import argparse
import json
import logging
import sys
from datetime import date
from zoneinfo import ZoneInfoNotFoundError

from .logging_utils import configure_logging
from .scheduling.config import DEFAULT_TIMEZONE
from .scheduling.exceptions import SchedulingError
from .scheduling.planner import SessionPlan, SessionPlanner
from .scheduling.snapshot import (
    JsonSnapshotSource,
    assignment_to_dict,
    completion_to_dict,
    session_to_dict,
)
from .scheduling.summary import describe_assignment

logger = logging.getLogger(__name__)


class SessionPlannerCLI:
    """Command-line interface for the session planner."""

    def __init__(
        self,
        planner: SessionPlanner | None = None,
        as_json: bool = False,
        show_past: bool = False,
    ) -> None:
        """
        Initialize the CLI.

        Args:
            planner: Optional SessionPlanner instance. If None, creates a new one.
            as_json: Print machine-readable JSON instead of text
            show_past: Also list past sessions
        """
        self._planner = planner or SessionPlanner()
        self._as_json = as_json
        self._show_past = show_past

    def print_plan(self, plan: SessionPlan) -> None:
        """Print upcoming sessions with their planned work."""
        if self._as_json:
            payload = {
                "today": plan.today.isoformat(),
                "upcoming": [assignment_to_dict(a) for a in plan.assignments],
            }
            if self._show_past:
                payload["past"] = [session_to_dict(s) for s in plan.past]
            print(json.dumps(payload, indent=2))
            return

        print(f"📅 Upcoming sessions as of {plan.today.isoformat()}")
        if not plan.assignments:
            print("   No upcoming sessions")
        for index, assignment in enumerate(plan.assignments):
            session = assignment.session
            work = describe_assignment(assignment) or "-"
            print(
                f"[{index}] {session.scheduled_date.isoformat()} "
                f"{assignment.used_hours:g}/{session.capacity:g}h  {work}"
            )

        if self._show_past:
            print("🕘 Past sessions")
            if not plan.past:
                print("   No past sessions")
            for session in plan.past:
                print(
                    f"    {session.scheduled_date.isoformat()} "
                    f"{session.scheduled_hours:g}h  {session.status.value}"
                )

    def print_summary(self, plan: SessionPlan, index: int) -> None:
        """Print the clipboard summary for one upcoming session."""
        summary = plan.summary(index)
        if self._as_json:
            print(json.dumps({"index": index, "summary": summary}))
        else:
            print(summary)

    def print_completion(self, plan: SessionPlan, index: int) -> None:
        """
        Print the completion plan for one upcoming session.

        Raises:
            SchedulingError: If the index is not an upcoming session or it has no work
        """
        if not 0 <= index < len(plan.assignments):
            raise SchedulingError(f"No upcoming session at index {index}")

        completion = plan.complete(plan.assignments[index].session.id)
        if self._as_json:
            print(json.dumps(completion_to_dict(completion), indent=2))
            return

        print(f"✅ Completing session {completion.session_id}")
        print(f"   Tasks to mark completed: {', '.join(completion.task_ids)}")
        print(f"   Notes: {completion.notes}")

    def run(
        self,
        snapshot_path: str,
        today: date | None = None,
        summary_index: int | None = None,
        complete_index: int | None = None,
    ) -> bool:
        """
        Plan a snapshot and print the requested view.

        Returns:
            True on success, False if the snapshot could not be planned
        """
        try:
            plan = self._planner.plan_from(JsonSnapshotSource(snapshot_path), today=today)

            if summary_index is not None:
                self.print_summary(plan, summary_index)
            elif complete_index is not None:
                self.print_completion(plan, complete_index)
            else:
                self.print_plan(plan)
            return True

        except SchedulingError as e:
            logger.debug("Planning failed", exc_info=True)
            print(f"❌ {e}", file=sys.stderr)
            return False


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid date: {value!r}") from e


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Session Planner CLI - Distribute task backlog across upcoming work sessions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  session-planner snapshot.json                       # Show planned sessions
  session-planner snapshot.json --past                # Include past sessions
  session-planner snapshot.json --summary 0           # Clipboard summary of first session
  session-planner snapshot.json --complete 0          # Completion plan for first session
  session-planner snapshot.json --today 2025-11-03    # Plan as of a given date
  session-planner snapshot.json --json -v             # JSON output with debug logging

The snapshot is a JSON object with "tasks" and "sessions" lists exported
by the storage layer.
        """,
    )

    parser.add_argument(
        "snapshot",
        metavar="SNAPSHOT",
        help="Path to a JSON snapshot with tasks and sessions",
    )

    parser.add_argument(
        "--today",
        type=_iso_date,
        default=None,
        metavar="YYYY-MM-DD",
        help="Calendar date to plan from (default: today in --timezone)",
    )

    parser.add_argument(
        "--timezone",
        default=DEFAULT_TIMEZONE,
        metavar="TZ",
        help=f"IANA timezone defining today's date (default: {DEFAULT_TIMEZONE})",
    )

    view = parser.add_mutually_exclusive_group()
    view.add_argument(
        "--summary",
        type=int,
        default=None,
        metavar="INDEX",
        help="Print the clipboard summary for the upcoming session at INDEX",
    )
    view.add_argument(
        "--complete",
        type=int,
        default=None,
        metavar="INDEX",
        help="Print the completion plan for the upcoming session at INDEX",
    )

    parser.add_argument(
        "--past",
        action="store_true",
        help="Also list past sessions",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print JSON instead of text",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging and debug information",
    )

    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace logging (most verbose, logs every allocation step)",
    )

    return parser


def handle_arguments(args: argparse.Namespace) -> SessionPlannerCLI:
    """
    Configure logging and build the CLI from parsed arguments.

    Args:
        args: Parsed arguments from argparse

    Returns:
        SessionPlannerCLI ready to run
    """
    configure_logging(verbose=args.verbose, trace=args.trace)

    planner = SessionPlanner(timezone=args.timezone)
    return SessionPlannerCLI(planner=planner, as_json=args.json, show_past=args.past)


def cli_entry_with_args(argv: list[str] | None = None) -> None:
    """CLI entry point with argument parsing."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        cli = handle_arguments(args)
    except (ZoneInfoNotFoundError, ValueError):
        parser.error(f"unknown timezone: {args.timezone}")

    success = cli.run(
        args.snapshot,
        today=args.today,
        summary_index=args.summary,
        complete_index=args.complete,
    )
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    cli_entry_with_args()
