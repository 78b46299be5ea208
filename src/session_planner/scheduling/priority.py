"""Priority ranking and work-unit ordering shared by the scheduler."""

import logging
import math
from collections.abc import Iterable

from .config import DEFAULT_ESTIMATED_HOURS, PRIORITY_RANKS, UNKNOWN_PRIORITY_RANK
from .models import Task, TaskPriority, WorkUnit

logger = logging.getLogger(__name__)


def priority_rank(priority: TaskPriority | str | None) -> int:
    """
    Map a priority to its ordinal rank.

    Args:
        priority: Task priority, its string value, or None

    Returns:
        3 for high, 2 for medium, 1 for low, 0 for anything else
    """
    if isinstance(priority, TaskPriority):
        priority = priority.value
    if not isinstance(priority, str):
        return UNKNOWN_PRIORITY_RANK
    return PRIORITY_RANKS.get(priority, UNKNOWN_PRIORITY_RANK)


def required_hours(task: Task) -> float:
    """Hours a task needs; falls back to the default for missing or invalid estimates."""
    hours = task.estimated_hours
    if (
        isinstance(hours, (int, float))
        and not isinstance(hours, bool)
        and math.isfinite(hours)
        and hours > 0
    ):
        return float(hours)
    return DEFAULT_ESTIMATED_HOURS


def work_unit_sort_key(unit: WorkUnit) -> tuple[int, bool, float]:
    """Sort key: higher rank first, then older first; undated units go last in a rank."""
    created_at = unit.created_at
    return (
        -priority_rank(unit.priority),
        created_at is None,
        created_at.timestamp() if created_at is not None else 0.0,
    )


def expand_work_units(backlog: Iterable[Task]) -> list[WorkUnit]:
    """
    Expand backlog tasks into work-units, keeping task iteration order.

    A task with open subtasks contributes one unit per open subtask, ordered
    by the same comparator. Any other task is itself the unit. Subtasks are
    never expanded further. Completed tasks are skipped.
    """
    units: list[WorkUnit] = []
    for task in backlog:
        if task.is_completed:
            logger.debug(f"Skipping completed task {task.id} in backlog")
            continue

        subtasks = task.open_subtasks()
        if not subtasks:
            units.append(WorkUnit(task=task, required_hours=required_hours(task)))
            continue

        group = [
            WorkUnit(task=subtask, required_hours=required_hours(subtask), parent=task)
            for subtask in subtasks
        ]
        units.extend(sorted(group, key=work_unit_sort_key))
    return units


def order_work_units(backlog: Iterable[Task]) -> list[WorkUnit]:
    """Return the backlog's work-units in allocation order."""
    return sorted(expand_work_units(backlog), key=work_unit_sort_key)
