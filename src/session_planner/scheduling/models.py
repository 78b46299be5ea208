"""Data models for session planning functionality."""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from .config import SUBTASK_TITLE_SEPARATOR


class TaskStatus(str, Enum):
    """Task status enumeration."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, Enum):
    """Task priority enumeration."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SessionStatus(str, Enum):
    """Session status enumeration."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class Task:
    """
    A unit of work someone intends to do.

    ``priority`` is None when the stored value is missing or unknown; such
    tasks rank below low priority. ``estimated_hours`` is None when the
    estimate is missing or invalid.
    """

    id: str
    title: str
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority | None = None
    created_at: datetime | None = None
    estimated_hours: float | None = None
    subtasks: list["Task"] = field(default_factory=list)
    description: str | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def open_subtasks(self) -> list["Task"]:
        """Return subtasks that are not completed, in stored order."""
        return [subtask for subtask in self.subtasks if not subtask.is_completed]


@dataclass
class Session:
    """A scheduled block of available work time."""

    id: str
    scheduled_date: date
    scheduled_hours: float
    status: SessionStatus = SessionStatus.SCHEDULED
    completed_task_ids: tuple[str, ...] = ()
    notes: str | None = None
    has_links: bool = False  # any session-task link record, with or without a task id

    @property
    def capacity(self) -> float:
        """Hours this session can absorb; negative or NaN values count as none."""
        if math.isnan(self.scheduled_hours) or self.scheduled_hours < 0:
            return 0.0
        return self.scheduled_hours

    @property
    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    @property
    def has_completed_tasks(self) -> bool:
        return self.has_links or len(self.completed_task_ids) > 0


@dataclass(frozen=True)
class WorkUnit:
    """A task, or one open subtask of a task, placed by the allocator."""

    task: Task
    required_hours: float
    parent: Task | None = None

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def title(self) -> str:
        if self.parent is None:
            return self.task.title
        return f"{self.parent.title}{SUBTASK_TITLE_SEPARATOR}{self.task.title}"

    @property
    def priority(self) -> TaskPriority | None:
        return self.task.priority

    @property
    def created_at(self) -> datetime | None:
        return self.task.created_at


@dataclass
class SessionAssignment:
    """An upcoming session annotated with the work-units planned for it."""

    session: Session
    assigned_tasks: list[WorkUnit] = field(default_factory=list)
    allocated_hours: dict[str, float] = field(default_factory=dict)

    def add(self, unit: WorkUnit, hours: float) -> None:
        """Record ``hours`` of ``unit`` in this session, listing the unit once."""
        if unit.id not in self.allocated_hours:
            self.assigned_tasks.append(unit)
            self.allocated_hours[unit.id] = 0.0
        self.allocated_hours[unit.id] += hours

    @property
    def used_hours(self) -> float:
        return sum(self.allocated_hours.values())

    @property
    def remaining_hours(self) -> float:
        return max(self.session.capacity - self.used_hours, 0.0)

    @property
    def titles(self) -> list[str]:
        return [unit.title for unit in self.assigned_tasks]


@dataclass
class ClassifiedSessions:
    """Sessions partitioned into upcoming (earliest first) and past (latest first)."""

    upcoming: list[Session] = field(default_factory=list)
    past: list[Session] = field(default_factory=list)


@dataclass
class SessionCompletion:
    """Writes a collaborator performs when a session is marked done."""

    session_id: str
    task_ids: list[str]
    links: list[tuple[str, str]]
    notes: str
    status: SessionStatus = SessionStatus.COMPLETED
