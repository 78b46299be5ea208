"""Custom exceptions for session planning functionality."""


class SchedulingError(Exception):
    """Base exception for session planning errors."""

    pass


class SnapshotError(SchedulingError):
    """Exception raised when a task/session snapshot cannot be read."""

    pass


class InvalidRecordError(SnapshotError):
    """Exception raised for a task or session record that cannot be normalized."""

    pass


class EmptySessionError(SchedulingError):
    """Exception raised when completing a session with no assigned work."""

    pass
