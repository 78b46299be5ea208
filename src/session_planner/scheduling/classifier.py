"""Partitioning of sessions into upcoming and past buckets."""

from collections.abc import Iterable
from datetime import date

from .models import ClassifiedSessions, Session


def is_upcoming(session: Session, today: date) -> bool:
    """
    Decide whether a session is still ahead of the user.

    A session is upcoming when it is scheduled after ``today``, or on
    ``today`` while neither completed nor linked to completed tasks.
    """
    if session.scheduled_date > today:
        return True
    return (
        session.scheduled_date == today
        and not session.is_completed
        and not session.has_completed_tasks
    )


def classify_sessions(sessions: Iterable[Session], today: date) -> ClassifiedSessions:
    """
    Partition sessions into upcoming and past.

    Args:
        sessions: Sessions in any order
        today: Current calendar date in the same convention as scheduled dates

    Returns:
        ClassifiedSessions with upcoming sorted earliest first and past
        sorted most recent first. Same-date sessions keep input order.
    """
    upcoming: list[Session] = []
    past: list[Session] = []
    for session in sessions:
        if is_upcoming(session, today):
            upcoming.append(session)
        else:
            past.append(session)

    upcoming.sort(key=lambda session: session.scheduled_date)
    past.sort(key=lambda session: session.scheduled_date, reverse=True)
    return ClassifiedSessions(upcoming=upcoming, past=past)
