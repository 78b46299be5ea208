"""
Greedy allocation of backlog work-units into upcoming sessions.

Work-units are taken in priority order (rank descending, then oldest
first) and poured into sessions in date order. A cursor points at the
session being filled together with the hours already consumed in it.
A unit that does not fit spills over into the next session; hours left
once the last session is full are dropped for this run, and the next
recomputation starts from scratch.
"""

import math
from collections.abc import Iterable, Sequence
from typing import NamedTuple

from session_planner.logging_utils import get_logger

from .config import HOURS_TOLERANCE
from .models import Session, SessionAssignment, Task, WorkUnit
from .priority import order_work_units

logger = get_logger(__name__)


class AllocationCursor(NamedTuple):
    """Fold state: session index being filled and hours consumed there."""

    index: int = 0
    consumed: float = 0.0


def place_work_unit(
    unit: WorkUnit,
    cursor: AllocationCursor,
    assignments: Sequence[SessionAssignment],
) -> tuple[AllocationCursor, float]:
    """
    Place one work-unit starting at ``cursor``.

    Args:
        unit: Work-unit to place
        cursor: Fold state before placing the unit
        assignments: Output assignments, one per upcoming session

    Returns:
        Tuple of (cursor after placement, hours that did not fit anywhere)
    """
    index, consumed = cursor
    remaining = unit.required_hours

    while remaining > 0 and index < len(assignments):
        assignment = assignments[index]
        capacity = assignment.session.capacity
        available = capacity - consumed

        if available > 0:
            hours = min(remaining, available)
            assignment.add(unit, hours)
            remaining -= hours
            # Filling the session pins consumed to capacity, and a rounding
            # sliver left on the unit is not carried into the next session.
            if hours == available:
                consumed = capacity
                if math.isclose(remaining, 0.0, abs_tol=HOURS_TOLERANCE):
                    remaining = 0.0
            else:
                consumed += hours
            logger.trace(  # type: ignore[attr-defined]
                f"Placed {hours:g}h of {unit.id} in session "
                f"{assignment.session.id} ({consumed:g}/{capacity:g}h)"
            )

        if consumed >= capacity and remaining > 0:
            index += 1
            consumed = 0.0

    return AllocationCursor(index, consumed), remaining


def allocate_sessions(
    sessions: Iterable[Session], backlog: Iterable[Task]
) -> list[SessionAssignment]:
    """
    Distribute the backlog across upcoming sessions.

    Args:
        sessions: Upcoming sessions, earliest first
        backlog: Non-completed tasks, possibly carrying subtasks

    Returns:
        One SessionAssignment per session, in input order. No session is
        given more hours than its capacity and no unit more than it needs.
    """
    assignments = [SessionAssignment(session=session) for session in sessions]
    cursor = AllocationCursor()

    for unit in order_work_units(backlog):
        cursor, dropped = place_work_unit(unit, cursor, assignments)
        if dropped > 0:
            logger.debug(
                f"Out of session capacity: {dropped:g}h of {unit.id} left unscheduled"
            )

    return assignments
