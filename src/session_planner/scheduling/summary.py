"""Text rendering of planned session work."""

from collections.abc import Sequence

from .config import NEXT_PREFIX, NO_TASKS_ASSIGNED, SUMMARY_SEPARATOR
from .models import SessionAssignment


def describe_assignment(assignment: SessionAssignment) -> str:
    """Titles of a session's planned work-units, comma separated."""
    return SUMMARY_SEPARATOR.join(assignment.titles)


def format_session_summary(
    assignments: Sequence[SessionAssignment], index: int
) -> str:
    """
    Summarize one session's work followed by a preview of what comes after.

    Args:
        assignments: Allocator output, earliest session first
        index: Position of the selected session. An index past the end has
            no current work; a negative index counts every session as later.

    Returns:
        "{current}, Next: {later}", "{current}", "Next: {later}", or
        "No tasks assigned" when there is nothing to show
    """
    if 0 <= index < len(assignments):
        current = assignments[index].titles
    else:
        current = []

    later = [
        title
        for assignment in assignments[max(index + 1, 0) :]
        for title in assignment.titles
    ]

    text = SUMMARY_SEPARATOR.join(current)
    if later:
        later_text = NEXT_PREFIX + SUMMARY_SEPARATOR.join(later)
        text = f"{text}{SUMMARY_SEPARATOR}{later_text}" if text else later_text

    return text or NO_TASKS_ASSIGNED
