"""
Device sync and full-account backup.

Sync hands back rows changed after the caller's watermark plus a new
watermark; backup snapshots every per-user table in one structure.
"""
import logging
import uuid
from datetime import datetime
from typing import Optional

from sqlmodel import Session, select

from models import (
    Event,
    PomodoroSession,
    ProductivityStats,
    Reminder,
    Task,
    TimeBlock,
    as_utc,
    utcnow,
)
from services.common import require_user

logger = logging.getLogger(__name__)


def _rows(db: Session, model, user_id: int, changed_column=None, since: Optional[datetime] = None):
    statement = select(model).where(model.user_id == user_id)
    if changed_column is not None and since is not None:
        statement = statement.where(changed_column > since)
    return [row.model_dump() for row in db.exec(statement.order_by(model.id)).all()]


def sync_user_data(db: Session, user_id: int, since: Optional[datetime] = None) -> dict:
    """
    Rows of this user newer than since (all rows when since is None).

    Tasks and events compare updated_at, time blocks and sessions created_at.
    The returned last_sync_timestamp is taken before reading, so a row written
    during the sync is picked up again next time rather than missed.
    """
    since = as_utc(since)
    watermark = utcnow()
    return {
        "tasks": _rows(db, Task, user_id, Task.updated_at, since),
        "events": _rows(db, Event, user_id, Event.updated_at, since),
        "time_blocks": _rows(db, TimeBlock, user_id, TimeBlock.created_at, since),
        "pomodoro_sessions": _rows(
            db, PomodoroSession, user_id, PomodoroSession.created_at, since
        ),
        "last_sync_timestamp": watermark,
    }


def backup_user_data(db: Session, user_id: int) -> dict:
    """Snapshot of all data owned by one user, tagged with a fresh backup id."""
    user = require_user(db, user_id)
    backup_id = f"backup_{user.id}_{uuid.uuid4().hex}"
    data = {
        "tasks": _rows(db, Task, user_id),
        "events": _rows(db, Event, user_id),
        "reminders": _rows(db, Reminder, user_id),
        "time_blocks": _rows(db, TimeBlock, user_id),
        "pomodoro_sessions": _rows(db, PomodoroSession, user_id),
        "productivity_stats": _rows(db, ProductivityStats, user_id),
    }
    logger.info(
        "Backup %s for user %s: %s",
        backup_id,
        user_id,
        {name: len(rows) for name, rows in data.items()},
    )
    return {
        "backup_id": backup_id,
        "user_id": user.id,
        "created_at": utcnow(),
        "data": data,
    }
