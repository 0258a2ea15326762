import logging

from sqlmodel import Session, select

from errors import NotFoundError, ValidationError
from models import Event, as_utc, utcnow
from schemas import EventCreate, EventUpdate
from services.common import find_owned_event, require_user

logger = logging.getLogger(__name__)


def _check_range(event: Event) -> None:
    if event.start_time >= event.end_time:
        raise ValidationError("Start time must be before end time")


def create_event(db: Session, user_id: int, data: EventCreate) -> Event:
    require_user(db, user_id)
    event = Event(
        user_id=user_id,
        title=data.title,
        description=data.description,
        event_type=data.event_type,
        start_time=as_utc(data.start_time),
        end_time=as_utc(data.end_time),
        location=data.location,
        is_all_day=data.is_all_day,
    )
    _check_range(event)
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event %s for user %s", event.id, user_id)
    return event


def update_event(db: Session, user_id: int, event_id: int, data: EventUpdate) -> Event:
    event = find_owned_event(db, user_id, event_id)
    if event is None:
        raise NotFoundError(f"Event with id {event_id} not found")

    changes = data.model_dump(exclude_unset=True)
    for field in ("start_time", "end_time"):
        if field in changes:
            changes[field] = as_utc(changes[field])
    for field, value in changes.items():
        setattr(event, field, value)
    _check_range(event)

    event.updated_at = utcnow()
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


def get_events(db: Session, user_id: int) -> list[Event]:
    statement = select(Event).where(Event.user_id == user_id).order_by(Event.start_time)
    return list(db.exec(statement).all())


def delete_event(db: Session, user_id: int, event_id: int) -> bool:
    """Delete the event if this user owns it; reminders and time blocks cascade."""
    event = find_owned_event(db, user_id, event_id)
    if event is None:
        return False
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s for user %s", event_id, user_id)
    return True
