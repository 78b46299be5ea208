"""Completion plan for a session the user marks as done."""

import logging

from .config import COMPLETED_TASKS_NOTE_PREFIX, NOTES_PARAGRAPH_SEPARATOR, SUMMARY_SEPARATOR
from .exceptions import EmptySessionError
from .models import SessionAssignment, SessionCompletion, SessionStatus

logger = logging.getLogger(__name__)


def build_session_completion(assignment: SessionAssignment) -> SessionCompletion:
    """
    Describe the writes that mark a session and its planned work as done.

    Nothing is persisted here; the storage layer applies the result.

    Args:
        assignment: The planned session being completed

    Returns:
        SessionCompletion with the task ids to complete, session-task links,
        the session's updated notes and its new status

    Raises:
        EmptySessionError: If no work is assigned to the session
    """
    session = assignment.session
    if not assignment.assigned_tasks:
        raise EmptySessionError(f"Session {session.id} has no assigned tasks")

    task_ids = [unit.id for unit in assignment.assigned_tasks]
    note = COMPLETED_TASKS_NOTE_PREFIX + SUMMARY_SEPARATOR.join(assignment.titles)
    notes = f"{session.notes}{NOTES_PARAGRAPH_SEPARATOR}{note}" if session.notes else note

    logger.info(f"Prepared completion of session {session.id} with {len(task_ids)} tasks")
    return SessionCompletion(
        session_id=session.id,
        task_ids=task_ids,
        links=[(session.id, task_id) for task_id in task_ids],
        notes=notes,
        status=SessionStatus.COMPLETED,
    )
