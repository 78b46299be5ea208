"""Abstract interfaces for the session planning system."""

from abc import ABC, abstractmethod

from session_planner.scheduling.models import Session, Task


class SnapshotSource(ABC):
    """Abstract read-only source of task and session snapshots."""

    @abstractmethod
    def load_tasks(self) -> list[Task]:
        """
        Load the tasks in scope, with their subtasks.

        Completed tasks may be included; the planner filters them out of
        the backlog.

        Returns:
            Task records validated at the boundary

        Raises:
            SnapshotError: If the snapshot cannot be read
        """
        pass

    @abstractmethod
    def load_sessions(self) -> list[Session]:
        """
        Load the sessions in scope, in any order.

        Returns:
            Session records validated at the boundary

        Raises:
            SnapshotError: If the snapshot cannot be read
        """
        pass
