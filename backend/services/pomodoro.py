"""
Pomodoro session lifecycle.

    running -> paused -> running
    running | paused -> completed | cancelled

Completed and cancelled are terminal. Only a transition into completed feeds
the productivity stats and the linked task's actual_duration; the status
change and both side effects commit as one transaction.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlmodel import Session, select

from errors import NotFoundError, ValidationError
from models import PomodoroSession, PomodoroStatus, Task, as_utc, utcnow
from services import stats
from services.common import find_owned_task, require_user

logger = logging.getLogger(__name__)

TRANSITIONS = {
    PomodoroStatus.running: {
        PomodoroStatus.paused,
        PomodoroStatus.completed,
        PomodoroStatus.cancelled,
    },
    PomodoroStatus.paused: {
        PomodoroStatus.running,
        PomodoroStatus.completed,
        PomodoroStatus.cancelled,
    },
    PomodoroStatus.completed: set(),
    PomodoroStatus.cancelled: set(),
}


def create_session(
    db: Session,
    user_id: int,
    duration: int,
    break_duration: int,
    task_id: Optional[int] = None,
) -> PomodoroSession:
    """Start a new session in the running state."""
    require_user(db, user_id)
    if task_id is not None and find_owned_task(db, user_id, task_id) is None:
        raise NotFoundError("Task not found")
    session = PomodoroSession(
        user_id=user_id,
        task_id=task_id,
        duration=duration,
        break_duration=break_duration,
        status=PomodoroStatus.running,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info("Started pomodoro session %s for user %s", session.id, user_id)
    return session


def update_session_status(
    db: Session,
    session_id: int,
    status: PomodoroStatus,
    completed_at: Optional[datetime] = None,
    user_id: Optional[int] = None,
) -> PomodoroSession:
    """
    Move a session to a new status.

    When user_id is given, a session of another user is treated as missing.
    Completing sets completed_at to the given time (or now), adds the
    session's duration to today's focus time and session count, and adds it
    to the linked task's actual_duration.
    """
    status = PomodoroStatus(status)
    statement = select(PomodoroSession).where(PomodoroSession.id == session_id).with_for_update()
    if user_id is not None:
        statement = statement.where(PomodoroSession.user_id == user_id)
    session = db.exec(statement).one_or_none()
    if session is None:
        raise NotFoundError("Pomodoro session not found")

    current = PomodoroStatus(session.status)
    if status not in TRANSITIONS[current]:
        raise ValidationError(
            f"Cannot change pomodoro session from {current.value} to {status.value}"
        )

    session.status = status
    if status == PomodoroStatus.completed:
        session.completed_at = as_utc(completed_at) or utcnow()
    db.add(session)

    try:
        if status == PomodoroStatus.completed:
            _apply_completion(db, session)
        db.commit()
    except Exception:
        logger.exception("Pomodoro session %s update to %s failed", session_id, status.value)
        db.rollback()
        raise

    db.refresh(session)
    logger.info("Pomodoro session %s is now %s", session.id, status.value)
    return session


def _apply_completion(db: Session, session: PomodoroSession) -> None:
    stats.record_daily(
        db,
        session.user_id,
        stats.today(),
        total_focus_time=session.duration,
        pomodoro_sessions=1,
    )
    if session.task_id is not None:
        task = db.get(Task, session.task_id)
        if task is not None:
            # Increment in SQL; a null actual_duration counts as 0.
            task.actual_duration = func.coalesce(Task.actual_duration, 0) + session.duration
            task.updated_at = utcnow()
            db.add(task)
            logger.info("Added %s min to task %s", session.duration, session.task_id)


def get_sessions(db: Session, user_id: int) -> list[PomodoroSession]:
    """Sessions of this user, most recently started first."""
    statement = (
        select(PomodoroSession)
        .where(PomodoroSession.user_id == user_id)
        .order_by(PomodoroSession.started_at.desc(), PomodoroSession.id.desc())
    )
    return list(db.exec(statement).all())
