from fastapi import APIRouter, Depends
from sqlmodel import Session

from db import get_session
from deps import current_user_id
from models import Task
from schemas import TaskCreate, TaskUpdate
from services import tasks

router = APIRouter(prefix="/api", tags=["tasks"])


@router.post("/tasks", response_model=Task, status_code=201)
def create_task(
    req: TaskCreate,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    return tasks.create_task(db, user_id, req)


@router.get("/tasks", response_model=list[Task])
def list_tasks(db: Session = Depends(get_session), user_id: int = Depends(current_user_id)):
    return tasks.get_tasks(db, user_id)


@router.patch("/tasks/{task_id}", response_model=Task)
def update_task(
    task_id: int,
    req: TaskUpdate,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """Update only the fields present in the body."""
    return tasks.update_task(db, user_id, task_id, req)


@router.delete("/tasks/{task_id}")
def delete_task(
    task_id: int,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    tasks.delete_task(db, user_id, task_id)
    return {"success": True}
