from __future__ import annotations

import datetime as dt
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    """Current time as naive UTC, the form every timestamp is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC already."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"
    urgent = "urgent"


class EventType(str, Enum):
    meeting = "meeting"
    appointment = "appointment"
    personal = "personal"
    work = "work"
    other = "other"


class ReminderType(str, Enum):
    notification = "notification"
    email = "email"
    both = "both"


class PomodoroStatus(str, Enum):
    running = "running"
    paused = "paused"
    completed = "completed"
    cancelled = "cancelled"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    username: str = Field(max_length=100, unique=True, index=True)
    password_hash: str
    timezone: str = Field(default="UTC", max_length=50)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class UserRead(SQLModel):
    id: int
    email: str
    username: str
    timezone: str
    created_at: datetime
    updated_at: datetime


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    status: TaskStatus = Field(default=TaskStatus.pending)
    priority: TaskPriority = Field(default=TaskPriority.medium)
    due_date: Optional[datetime] = None
    estimated_duration: Optional[int] = None  # minutes
    actual_duration: Optional[int] = None  # minutes
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Event(SQLModel, table=True):
    __tablename__ = "events"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=255)
    description: Optional[str] = None
    event_type: EventType = Field(default=EventType.other)
    start_time: datetime
    end_time: datetime
    location: Optional[str] = Field(default=None, max_length=255)
    is_all_day: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Reminder(SQLModel, table=True):
    __tablename__ = "reminders"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    task_id: Optional[int] = Field(default=None, foreign_key="tasks.id", ondelete="CASCADE")
    event_id: Optional[int] = Field(default=None, foreign_key="events.id", ondelete="CASCADE")
    reminder_type: ReminderType = Field(default=ReminderType.notification)
    reminder_time: datetime
    message: str
    is_sent: bool = False
    created_at: datetime = Field(default_factory=utcnow)


class TimeBlock(SQLModel, table=True):
    __tablename__ = "time_blocks"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    task_id: Optional[int] = Field(default=None, foreign_key="tasks.id", ondelete="CASCADE")
    event_id: Optional[int] = Field(default=None, foreign_key="events.id", ondelete="CASCADE")
    title: str = Field(max_length=255)
    start_time: datetime = Field(index=True)
    end_time: datetime
    color: Optional[str] = Field(default=None, max_length=7)  # hex, e.g. #FF5733
    created_at: datetime = Field(default_factory=utcnow)


class PomodoroSession(SQLModel, table=True):
    __tablename__ = "pomodoro_sessions"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    task_id: Optional[int] = Field(default=None, foreign_key="tasks.id", ondelete="CASCADE")
    duration: int  # minutes
    break_duration: int  # minutes
    status: PomodoroStatus = Field(default=PomodoroStatus.running)
    started_at: datetime = Field(default_factory=utcnow)
    completed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=utcnow)


class ProductivityStats(SQLModel, table=True):
    __tablename__ = "productivity_stats"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_productivity_stats_user_day"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    date: dt.date
    tasks_completed: int = 0
    tasks_created: int = 0
    total_focus_time: int = 0  # minutes
    pomodoro_sessions: int = 0
    events_attended: int = 0
    created_at: datetime = Field(default_factory=utcnow)
