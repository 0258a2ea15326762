import logging

from sqlmodel import Session, select

from errors import NotFoundError
from models import Task, TaskStatus, as_utc, utcnow
from schemas import TaskCreate, TaskUpdate
from services import stats
from services.common import find_owned_task, require_user

logger = logging.getLogger(__name__)


def create_task(db: Session, user_id: int, data: TaskCreate) -> Task:
    """Create a pending task and count it in today's tasks_created."""
    require_user(db, user_id)
    task = Task(
        user_id=user_id,
        title=data.title,
        description=data.description,
        priority=data.priority,
        due_date=as_utc(data.due_date),
        estimated_duration=data.estimated_duration,
    )
    db.add(task)
    stats.record_daily(db, user_id, stats.today(), tasks_created=1)
    db.commit()
    db.refresh(task)
    logger.info("Created task %s for user %s", task.id, user_id)
    return task


def update_task(db: Session, user_id: int, task_id: int, data: TaskUpdate) -> Task:
    """Apply the fields that were set on data; always bumps updated_at."""
    task = find_owned_task(db, user_id, task_id)
    if task is None:
        raise NotFoundError(f"Task with id {task_id} not found")

    changes = data.model_dump(exclude_unset=True)
    if "due_date" in changes:
        changes["due_date"] = as_utc(changes["due_date"])
    newly_completed = (
        changes.get("status") == TaskStatus.completed and task.status != TaskStatus.completed
    )

    for field, value in changes.items():
        setattr(task, field, value)
    task.updated_at = utcnow()
    db.add(task)
    if newly_completed:
        stats.record_daily(db, user_id, stats.today(), tasks_completed=1)
    db.commit()
    db.refresh(task)
    return task


def get_tasks(db: Session, user_id: int) -> list[Task]:
    statement = select(Task).where(Task.user_id == user_id).order_by(Task.created_at, Task.id)
    return list(db.exec(statement).all())


def delete_task(db: Session, user_id: int, task_id: int) -> None:
    """Delete the task; its reminders, time blocks and sessions go with it."""
    task = find_owned_task(db, user_id, task_id)
    if task is None:
        raise NotFoundError("Task not found or access denied")
    db.delete(task)
    db.commit()
    logger.info("Deleted task %s for user %s", task_id, user_id)
