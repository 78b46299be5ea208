"""Session planning: allocation of prioritized backlog work into work sessions."""

from .allocator import allocate_sessions
from .classifier import classify_sessions
from .models import (
    ClassifiedSessions,
    Session,
    SessionAssignment,
    SessionCompletion,
    SessionStatus,
    Task,
    TaskPriority,
    TaskStatus,
    WorkUnit,
)
from .planner import SessionPlan, SessionPlanner
from .summary import describe_assignment, format_session_summary

__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
    "Session",
    "SessionStatus",
    "WorkUnit",
    "SessionAssignment",
    "ClassifiedSessions",
    "SessionCompletion",
    "SessionPlan",
    "SessionPlanner",
    "allocate_sessions",
    "classify_sessions",
    "describe_assignment",
    "format_session_summary",
]
