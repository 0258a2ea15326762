import logging

from sqlmodel import Session, select

from errors import NotFoundError, ValidationError
from models import Reminder, as_utc, utcnow
from schemas import ReminderCreate
from services.common import find_owned_event, find_owned_task, require_user

logger = logging.getLogger(__name__)


def create_reminder(db: Session, user_id: int, data: ReminderCreate) -> Reminder:
    """A reminder points at exactly one task or one event of the same user."""
    require_user(db, user_id)
    if (data.task_id is None) == (data.event_id is None):
        raise ValidationError("Either task_id or event_id must be provided, but not both")
    if data.task_id is not None and find_owned_task(db, user_id, data.task_id) is None:
        raise NotFoundError("Referenced task does not exist")
    if data.event_id is not None and find_owned_event(db, user_id, data.event_id) is None:
        raise NotFoundError("Referenced event does not exist")

    reminder = Reminder(
        user_id=user_id,
        task_id=data.task_id,
        event_id=data.event_id,
        reminder_type=data.reminder_type,
        reminder_time=as_utc(data.reminder_time),
        message=data.message,
    )
    db.add(reminder)
    db.commit()
    db.refresh(reminder)
    logger.info("Created reminder %s for user %s", reminder.id, user_id)
    return reminder


def get_reminders(db: Session, user_id: int) -> list[Reminder]:
    """Unsent reminders of this user that are due now."""
    statement = (
        select(Reminder)
        .where(
            Reminder.user_id == user_id,
            Reminder.is_sent == False,  # noqa: E712
            Reminder.reminder_time <= utcnow(),
        )
        .order_by(Reminder.reminder_time)
    )
    return list(db.exec(statement).all())
