"""
Time blocking: validated creation of non-overlapping blocks per user.

Blocks are half-open intervals [start_time, end_time). Two blocks of the same
user overlap when existing.start < new.end and existing.end > new.start, so a
block may begin exactly where another ends. Different users never conflict.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlmodel import Session, select

from errors import NotFoundError, ValidationError
from models import TimeBlock, as_utc
from services.common import find_owned_event, find_owned_task, require_user

logger = logging.getLogger(__name__)


def find_overlapping(
    db: Session, user_id: int, start_time: datetime, end_time: datetime
) -> list[TimeBlock]:
    """Existing blocks of this user that share any instant with [start_time, end_time)."""
    statement = (
        select(TimeBlock)
        .where(
            TimeBlock.user_id == user_id,
            TimeBlock.start_time < end_time,
            TimeBlock.end_time > start_time,
        )
        .order_by(TimeBlock.start_time)
    )
    return list(db.exec(statement).all())


def create_time_block(
    db: Session,
    user_id: int,
    title: str,
    start_time: datetime,
    end_time: datetime,
    task_id: Optional[int] = None,
    event_id: Optional[int] = None,
    color: Optional[str] = None,
) -> TimeBlock:
    """
    Validate and persist a new time block.

    Raises NotFoundError for a missing owner, task or event (a task/event of
    another user counts as missing) and ValidationError for a link to both a
    task and an event, an empty or inverted range, or an overlap.
    """
    start_time, end_time = as_utc(start_time), as_utc(end_time)

    # Locks the owner row so concurrent creations for one user run one at a time.
    require_user(db, user_id, lock=True)

    if task_id is not None and event_id is not None:
        raise ValidationError("A time block can link to a task or an event, not both")
    if task_id is not None and find_owned_task(db, user_id, task_id) is None:
        raise NotFoundError("Task not found")
    if event_id is not None and find_owned_event(db, user_id, event_id) is None:
        raise NotFoundError("Event not found")

    if end_time <= start_time:
        raise ValidationError("End time must be after start time")

    conflicts = find_overlapping(db, user_id, start_time, end_time)
    if conflicts:
        logger.warning(
            "Rejected block %s-%s for user %s: overlaps block(s) %s",
            start_time.isoformat(),
            end_time.isoformat(),
            user_id,
            [b.id for b in conflicts],
        )
        raise ValidationError("Time block conflicts with existing time blocks")

    block = TimeBlock(
        user_id=user_id,
        task_id=task_id,
        event_id=event_id,
        title=title,
        start_time=start_time,
        end_time=end_time,
        color=color,
    )
    db.add(block)
    db.commit()
    db.refresh(block)
    logger.info("Created time block %s for user %s", block.id, user_id)
    return block


def get_time_blocks(
    db: Session,
    user_id: int,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> list[TimeBlock]:
    """Blocks of this user that lie entirely within the optional bounds."""
    statement = select(TimeBlock).where(TimeBlock.user_id == user_id)
    if start_date is not None:
        statement = statement.where(TimeBlock.start_time >= as_utc(start_date))
    if end_date is not None:
        statement = statement.where(TimeBlock.end_time <= as_utc(end_date))
    return list(db.exec(statement.order_by(TimeBlock.start_time)).all())


def delete_time_block(db: Session, user_id: int, block_id: int) -> bool:
    statement = select(TimeBlock).where(TimeBlock.id == block_id, TimeBlock.user_id == user_id)
    block = db.exec(statement).one_or_none()
    if block is None:
        return False
    db.delete(block)
    db.commit()
    logger.info("Deleted time block %s for user %s", block_id, user_id)
    return True
