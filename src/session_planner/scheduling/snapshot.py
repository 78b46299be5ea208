"""Boundary parsing and serialization of task/session snapshots."""

import json
import logging
import math
from collections.abc import Mapping
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any

from .exceptions import InvalidRecordError, SnapshotError
from .interfaces import SnapshotSource
from .models import (
    Session,
    SessionAssignment,
    SessionCompletion,
    SessionStatus,
    Task,
    TaskPriority,
    TaskStatus,
    WorkUnit,
)

logger = logging.getLogger(__name__)


def _require_id(record: Mapping[str, Any], kind: str) -> str:
    value = record.get("id")
    if value is None or value == "":
        raise InvalidRecordError(f"{kind} record is missing an id")
    return str(value)


def _parse_hours(value: Any) -> float | None:
    """Return a finite number of hours, or None for anything non-numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    return hours if math.isfinite(hours) else None


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value:
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            logger.warning(f"Ignoring unparseable timestamp: {value!r}")
            return None
    else:
        return None

    # Naive timestamps are stored in UTC
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _parse_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        if len(value) > 10:
            return datetime.fromisoformat(value).date()
        return date.fromisoformat(value)
    except ValueError:
        return None


def _parse_priority(value: Any) -> TaskPriority | None:
    if isinstance(value, TaskPriority):
        return value
    try:
        return TaskPriority(str(value).lower())
    except ValueError:
        if value is not None:
            logger.debug(f"Unknown priority {value!r}, ranking below low")
        return None


def _parse_task_status(value: Any) -> TaskStatus:
    try:
        return TaskStatus(value)
    except ValueError:
        return TaskStatus.TODO


def _parse_session_status(value: Any) -> SessionStatus:
    try:
        return SessionStatus(value)
    except ValueError:
        return SessionStatus.SCHEDULED


def _session_links(record: Mapping[str, Any]) -> list[Any]:
    links = record.get("completed_task_ids")
    if links is None:
        links = record.get("session_tasks")
    return links if isinstance(links, list) else []


def _parse_completed_task_ids(links: list[Any]) -> tuple[str, ...]:
    task_ids = []
    for link in links:
        if isinstance(link, Mapping):
            link = link.get("task_id")
        if link is not None:
            task_ids.append(str(link))
    return tuple(task_ids)


def task_from_dict(record: Any, nested: bool = False) -> Task:
    """
    Build a Task from a loosely-typed record.

    Malformed optional fields are normalized: a missing or invalid estimate
    becomes None, an unknown priority None, an unknown status todo, and
    missing subtasks an empty list. Subtasks of subtasks are ignored.

    Args:
        record: Mapping with task fields
        nested: True when parsing a subtask

    Returns:
        Task object

    Raises:
        InvalidRecordError: If the record is not a mapping or has no id
    """
    if not isinstance(record, Mapping):
        raise InvalidRecordError(f"Task record must be an object, got {type(record).__name__}")

    subtasks: list[Task] = []
    raw_subtasks = record.get("subtasks")
    if not nested and isinstance(raw_subtasks, list):
        subtasks = [task_from_dict(subtask, nested=True) for subtask in raw_subtasks]

    hours = _parse_hours(record.get("estimated_hours"))

    return Task(
        id=_require_id(record, "Task"),
        title=str(record.get("title") or ""),
        status=_parse_task_status(record.get("status")),
        priority=_parse_priority(record.get("priority")),
        created_at=_parse_timestamp(record.get("created_at")),
        estimated_hours=hours if hours is not None and hours > 0 else None,
        subtasks=subtasks,
        description=record.get("description"),
    )


def session_from_dict(record: Any) -> Session:
    """
    Build a Session from a loosely-typed record.

    Args:
        record: Mapping with session fields

    Returns:
        Session object; non-numeric scheduled hours become 0.0

    Raises:
        InvalidRecordError: If the record is not a mapping, has no id, or
            has no parseable scheduled date
    """
    if not isinstance(record, Mapping):
        raise InvalidRecordError(
            f"Session record must be an object, got {type(record).__name__}"
        )

    session_id = _require_id(record, "Session")
    scheduled_date = _parse_date(record.get("scheduled_date"))
    if scheduled_date is None:
        raise InvalidRecordError(
            f"Session {session_id} has invalid scheduled_date: "
            f"{record.get('scheduled_date')!r}"
        )

    links = _session_links(record)
    return Session(
        id=session_id,
        scheduled_date=scheduled_date,
        scheduled_hours=_parse_hours(record.get("scheduled_hours")) or 0.0,
        status=_parse_session_status(record.get("status")),
        completed_task_ids=_parse_completed_task_ids(links),
        notes=record.get("notes"),
        has_links=bool(links),
    )


def parse_snapshot(data: Any) -> tuple[list[Task], list[Session]]:
    """
    Parse a decoded snapshot document.

    Args:
        data: Object with optional "tasks" and "sessions" lists

    Returns:
        Tuple of (tasks, sessions)

    Raises:
        SnapshotError: If the document is not an object or its lists are malformed
    """
    if not isinstance(data, Mapping):
        raise SnapshotError("Snapshot must be a JSON object")

    tasks = data.get("tasks") or []
    sessions = data.get("sessions") or []
    if not isinstance(tasks, list) or not isinstance(sessions, list):
        raise SnapshotError("Snapshot 'tasks' and 'sessions' must be lists")

    return (
        [task_from_dict(record) for record in tasks],
        [session_from_dict(record) for record in sessions],
    )


def load_snapshot(path: str | Path) -> tuple[list[Task], list[Session]]:
    """
    Load tasks and sessions from a JSON snapshot file.

    Raises:
        SnapshotError: If the file cannot be read or parsed
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"Failed to read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {e}") from e

    tasks, sessions = parse_snapshot(data)
    logger.debug(f"Loaded {len(tasks)} tasks and {len(sessions)} sessions from {path}")
    return tasks, sessions


class JsonSnapshotSource(SnapshotSource):
    """Snapshot source backed by a JSON file exported by the storage layer."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._snapshot: tuple[list[Task], list[Session]] | None = None

    def _load(self) -> tuple[list[Task], list[Session]]:
        if self._snapshot is None:
            self._snapshot = load_snapshot(self.path)
        return self._snapshot

    def load_tasks(self) -> list[Task]:
        return list(self._load()[0])

    def load_sessions(self) -> list[Session]:
        return list(self._load()[1])


def work_unit_to_dict(unit: WorkUnit, hours: float | None = None) -> dict[str, Any]:
    data: dict[str, Any] = {
        "id": unit.id,
        "title": unit.title,
        "priority": unit.priority.value if unit.priority else None,
        "required_hours": unit.required_hours,
        "parent_id": unit.parent.id if unit.parent else None,
    }
    if hours is not None:
        data["allocated_hours"] = hours
    return data


def session_to_dict(session: Session) -> dict[str, Any]:
    return {
        "id": session.id,
        "scheduled_date": session.scheduled_date.isoformat(),
        "scheduled_hours": session.scheduled_hours,
        "status": session.status.value,
        "completed_task_ids": list(session.completed_task_ids),
        "notes": session.notes,
    }


def assignment_to_dict(assignment: SessionAssignment) -> dict[str, Any]:
    return {
        "session": session_to_dict(assignment.session),
        "assigned_tasks": [
            work_unit_to_dict(unit, assignment.allocated_hours[unit.id])
            for unit in assignment.assigned_tasks
        ],
        "used_hours": assignment.used_hours,
    }


def completion_to_dict(completion: SessionCompletion) -> dict[str, Any]:
    return {
        "session_id": completion.session_id,
        "task_ids": completion.task_ids,
        "links": [
            {"session_id": session_id, "task_id": task_id}
            for session_id, task_id in completion.links
        ],
        "notes": completion.notes,
        "status": completion.status.value,
    }
