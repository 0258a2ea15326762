from datetime import datetime

from sqlmodel import Session, select

from models import Event, Task, TimeBlock, as_utc


def get_calendar_data(db: Session, user_id: int, start_date: datetime, end_date: datetime) -> dict:
    """
    Everything that lands on the calendar between start_date and end_date
    (both inclusive): tasks by due_date, events and time blocks by start_time.
    Tasks without a due date never appear.
    """
    start, end = as_utc(start_date), as_utc(end_date)

    tasks = db.exec(
        select(Task)
        .where(Task.user_id == user_id, Task.due_date >= start, Task.due_date <= end)
        .order_by(Task.due_date)
    ).all()
    events = db.exec(
        select(Event)
        .where(Event.user_id == user_id, Event.start_time >= start, Event.start_time <= end)
        .order_by(Event.start_time)
    ).all()
    time_blocks = db.exec(
        select(TimeBlock)
        .where(
            TimeBlock.user_id == user_id,
            TimeBlock.start_time >= start,
            TimeBlock.start_time <= end,
        )
        .order_by(TimeBlock.start_time)
    ).all()

    return {"tasks": list(tasks), "events": list(events), "time_blocks": list(time_blocks)}
