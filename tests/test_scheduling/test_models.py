"""Unit tests for session planning models."""

from collections.abc import Callable

import pytest

from session_planner.scheduling.models import (
    Session,
    SessionAssignment,
    Task,
    TaskStatus,
    WorkUnit,
)


@pytest.mark.unit
class TestSession:
    """Test session capacity and status helpers."""

    @pytest.mark.parametrize(
        ("hours", "capacity"),
        [(2.5, 2.5), (0, 0.0), (-1, 0.0), (float("nan"), 0.0)],
    )
    def test_capacity(self, make_session: Callable[..., Session], hours: float, capacity: float) -> None:
        assert make_session("s", hours=hours).capacity == capacity

    def test_has_completed_tasks(self, make_session: Callable[..., Session]) -> None:
        assert make_session("s").has_completed_tasks is False
        assert make_session("s", completed_task_ids=("t",)).has_completed_tasks is True

    def test_link_record_without_task_id_counts_as_completed_work(
        self, make_session: Callable[..., Session]
    ) -> None:
        session = make_session("s")
        session.has_links = True

        assert session.has_completed_tasks is True


@pytest.mark.unit
class TestTask:
    """Test task helpers."""

    def test_open_subtasks(self, make_task: Callable[..., Task]) -> None:
        task = make_task(
            "p",
            subtasks=[
                make_task("a"),
                make_task("b", status=TaskStatus.COMPLETED),
                make_task("c", status=TaskStatus.IN_PROGRESS),
            ],
        )

        assert [t.id for t in task.open_subtasks()] == ["a", "c"]


@pytest.mark.unit
class TestSessionAssignment:
    """Test assignment bookkeeping."""

    def test_add_lists_unit_once(
        self, make_task: Callable[..., Task], make_session: Callable[..., Session]
    ) -> None:
        unit = WorkUnit(task=make_task("a"), required_hours=2.0)
        assignment = SessionAssignment(session=make_session("s", hours=3))

        assignment.add(unit, 1.0)
        assignment.add(unit, 0.5)

        assert assignment.assigned_tasks == [unit]
        assert assignment.allocated_hours == {"a": 1.5}
        assert assignment.used_hours == 1.5
        assert assignment.remaining_hours == 1.5

    def test_work_unit_title(self, make_task: Callable[..., Task]) -> None:
        parent = make_task("p", title="Launch")
        child = make_task("c", title="Deploy")

        assert WorkUnit(task=child, required_hours=1.0).title == "Deploy"
        assert WorkUnit(task=child, required_hours=1.0, parent=parent).title == "Launch - Deploy"
