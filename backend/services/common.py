"""
Ownership lookups shared by the services.
"""
from typing import Optional

from sqlmodel import Session, select

from errors import NotFoundError
from models import Event, Task, User


def require_user(db: Session, user_id: int, lock: bool = False) -> User:
    """Load the user or raise NotFoundError.

    With lock=True the row is read FOR UPDATE, which serialises concurrent
    writers for the same user on databases that support row locks.
    """
    statement = select(User).where(User.id == user_id)
    if lock:
        statement = statement.with_for_update()
    user = db.exec(statement).one_or_none()
    if user is None:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def find_owned_task(db: Session, user_id: int, task_id: int) -> Optional[Task]:
    statement = select(Task).where(Task.id == task_id, Task.user_id == user_id)
    return db.exec(statement).one_or_none()


def find_owned_event(db: Session, user_id: int, event_id: int) -> Optional[Event]:
    statement = select(Event).where(Event.id == event_id, Event.user_id == user_id)
    return db.exec(statement).one_or_none()
