"""Session planner combining classification, backlog filtering and allocation."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from zoneinfo import ZoneInfo

from .allocator import allocate_sessions
from .classifier import classify_sessions
from .completion import build_session_completion
from .config import DEFAULT_TIMEZONE
from .exceptions import SchedulingError
from .interfaces import SnapshotSource
from .models import Session, SessionAssignment, SessionCompletion, Task
from .summary import format_session_summary

logger = logging.getLogger(__name__)


@dataclass
class SessionPlan:
    """Planned upcoming sessions plus the past sessions, as of ``today``."""

    today: date
    assignments: list[SessionAssignment] = field(default_factory=list)
    past: list[Session] = field(default_factory=list)

    def summary(self, index: int) -> str:
        """Clipboard summary for the upcoming session at ``index``."""
        return format_session_summary(self.assignments, index)

    def assignment_for(self, session_id: str) -> SessionAssignment:
        """
        Find the planned assignment of an upcoming session.

        Raises:
            SchedulingError: If the session is not upcoming in this plan
        """
        for assignment in self.assignments:
            if assignment.session.id == session_id:
                return assignment
        raise SchedulingError(f"Session {session_id} is not an upcoming session")

    def complete(self, session_id: str) -> SessionCompletion:
        """Completion plan for an upcoming session."""
        return build_session_completion(self.assignment_for(session_id))


class SessionPlanner:
    """
    Plans backlog work into upcoming sessions.

    Holds no state between calls: every plan is recomputed from the
    snapshot it is given.
    """

    def __init__(
        self,
        today_provider: Callable[[], date] | None = None,
        timezone: str = DEFAULT_TIMEZONE,
    ) -> None:
        """
        Initialize Session Planner.

        Args:
            today_provider: Callable returning the current calendar date;
                defaults to the date in ``timezone``
            timezone: IANA timezone defining the calendar day
        """
        self._today_provider = today_provider
        self._timezone = ZoneInfo(timezone)

    def today(self) -> date:
        """Current calendar date in the planner's timezone."""
        if self._today_provider is not None:
            return self._today_provider()
        return datetime.now(self._timezone).date()

    @staticmethod
    def backlog(tasks: Iterable[Task]) -> list[Task]:
        """Top-level tasks that are not completed."""
        return [task for task in tasks if not task.is_completed]

    def plan(
        self,
        tasks: Iterable[Task],
        sessions: Iterable[Session],
        today: date | None = None,
    ) -> SessionPlan:
        """
        Classify sessions and allocate the backlog into the upcoming ones.

        Args:
            tasks: Tasks in scope, completed ones included or not
            sessions: Sessions in scope, in any order
            today: Calendar date to plan from (defaults to ``self.today()``)

        Returns:
            SessionPlan for ``today``
        """
        today = today or self.today()
        classified = classify_sessions(sessions, today)
        backlog = self.backlog(tasks)
        assignments = allocate_sessions(classified.upcoming, backlog)

        logger.info(
            f"Planned {len(backlog)} tasks into {len(assignments)} upcoming sessions "
            f"({len(classified.past)} past) for {today.isoformat()}"
        )
        return SessionPlan(today=today, assignments=assignments, past=classified.past)

    def plan_from(self, source: SnapshotSource, today: date | None = None) -> SessionPlan:
        """Plan from a snapshot source."""
        return self.plan(source.load_tasks(), source.load_sessions(), today=today)
