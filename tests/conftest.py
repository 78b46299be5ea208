"""Shared fixtures for session planner tests."""

from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from typing import Any

import pytest

from session_planner.scheduling.models import (
    Session,
    SessionStatus,
    Task,
    TaskPriority,
    TaskStatus,
)

BASE_TIME = datetime(2025, 11, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def today() -> date:
    """Fixed planning date."""
    return date(2025, 11, 3)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    """Factory for tasks; ``age`` orders creation times (lower is older)."""

    def _make_task(
        task_id: str,
        priority: TaskPriority | None = TaskPriority.MEDIUM,
        hours: float | None = 1.0,
        age: int = 0,
        status: TaskStatus = TaskStatus.TODO,
        subtasks: list[Task] | None = None,
        title: str | None = None,
    ) -> Task:
        return Task(
            id=task_id,
            title=title or task_id,
            status=status,
            priority=priority,
            created_at=BASE_TIME + timedelta(minutes=age),
            estimated_hours=hours,
            subtasks=subtasks or [],
        )

    return _make_task


@pytest.fixture
def make_session(today: date) -> Callable[..., Session]:
    """Factory for sessions ``offset`` days after the fixed planning date."""

    def _make_session(
        session_id: str,
        hours: float = 2.0,
        offset: int = 1,
        status: SessionStatus = SessionStatus.SCHEDULED,
        completed_task_ids: tuple[str, ...] = (),
        notes: str | None = None,
    ) -> Session:
        return Session(
            id=session_id,
            scheduled_date=today + timedelta(days=offset),
            scheduled_hours=hours,
            status=status,
            completed_task_ids=completed_task_ids,
            notes=notes,
        )

    return _make_session


@pytest.fixture
def snapshot_data() -> dict[str, Any]:
    """Snapshot document as exported by the storage layer."""
    return {
        "tasks": [
            {
                "id": "t-report",
                "title": "Report",
                "status": "todo",
                "priority": "high",
                "estimated_hours": 3,
                "created_at": "2025-11-01T09:00:00Z",
                "subtasks": [
                    {
                        "id": "s-outline",
                        "title": "Outline",
                        "status": "todo",
                        "priority": "high",
                        "estimated_hours": 1,
                        "created_at": "2025-11-01T09:05:00Z",
                    },
                    {
                        "id": "s-draft",
                        "title": "Draft",
                        "status": "in_progress",
                        "priority": "low",
                        "estimated_hours": 2,
                        "created_at": "2025-11-01T09:10:00Z",
                    },
                    {
                        "id": "s-notes",
                        "title": "Notes",
                        "status": "completed",
                        "priority": "high",
                        "estimated_hours": 1,
                        "created_at": "2025-11-01T09:01:00Z",
                    },
                ],
            },
            {
                "id": "t-email",
                "title": "Email",
                "status": "todo",
                "priority": "medium",
                "estimated_hours": None,
                "created_at": "2025-11-02T10:00:00Z",
            },
            {
                "id": "t-done",
                "title": "Done already",
                "status": "completed",
                "priority": "high",
                "estimated_hours": 1,
                "created_at": "2025-10-01T10:00:00Z",
            },
        ],
        "sessions": [
            {
                "id": "sess-wed",
                "scheduled_date": "2025-11-05",
                "scheduled_hours": 2,
                "status": "scheduled",
            },
            {
                "id": "sess-today",
                "scheduled_date": "2025-11-03",
                "scheduled_hours": 2,
                "status": "scheduled",
            },
            {
                "id": "sess-old",
                "scheduled_date": "2025-10-30",
                "scheduled_hours": 2,
                "status": "completed",
                "session_tasks": [{"task_id": "t-done"}],
            },
        ],
    }
