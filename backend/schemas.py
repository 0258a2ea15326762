"""
Request bodies accepted by the API and the service layer.

The owning user never appears here: it comes from the X-User-Id header and is
passed to the services explicitly.
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from models import EventType, PomodoroStatus, ReminderType, TaskPriority, TaskStatus


def _reject_null(value):
    # Omitting a field leaves it unchanged; an explicit null is not allowed.
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


class UserCreate(BaseModel):
    email: EmailStr
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6)
    timezone: str = "UTC"


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.medium
    due_date: Optional[datetime] = None
    estimated_duration: Optional[int] = Field(default=None, gt=0)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    estimated_duration: Optional[int] = Field(default=None, gt=0)
    actual_duration: Optional[int] = Field(default=None, ge=0)

    @field_validator("title", "status", "priority")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    event_type: EventType = EventType.other
    start_time: datetime
    end_time: datetime
    location: Optional[str] = None
    is_all_day: bool = False


class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    is_all_day: Optional[bool] = None

    @field_validator("title", "event_type", "start_time", "end_time", "is_all_day")
    @classmethod
    def not_null(cls, value):
        return _reject_null(value)


class ReminderCreate(BaseModel):
    task_id: Optional[int] = None
    event_id: Optional[int] = None
    reminder_type: ReminderType = ReminderType.notification
    reminder_time: datetime
    message: str


class TimeBlockCreate(BaseModel):
    task_id: Optional[int] = None
    event_id: Optional[int] = None
    title: str = Field(min_length=1, max_length=255)
    start_time: datetime
    end_time: datetime
    color: Optional[str] = Field(default=None, pattern=r"^#[0-9A-Fa-f]{6}$")


class PomodoroSessionCreate(BaseModel):
    task_id: Optional[int] = None
    duration: int = Field(gt=0)
    break_duration: int = Field(gt=0)


class PomodoroSessionUpdate(BaseModel):
    status: PomodoroStatus
    completed_at: Optional[datetime] = None
