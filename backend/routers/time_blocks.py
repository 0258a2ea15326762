"""
Time blocking: reserve non-overlapping slices of the day for a task or event.
"""
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from db import get_session
from deps import current_user_id
from models import TimeBlock
from schemas import TimeBlockCreate
from services import time_blocks

router = APIRouter(prefix="/api", tags=["time-blocks"])


@router.post("/time-blocks", response_model=TimeBlock, status_code=201)
def create_time_block(
    req: TimeBlockCreate,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """Create a block. Fails with 422 if it overlaps one of the user's blocks."""
    return time_blocks.create_time_block(
        db,
        user_id,
        title=req.title,
        start_time=req.start_time,
        end_time=req.end_time,
        task_id=req.task_id,
        event_id=req.event_id,
        color=req.color,
    )


@router.get("/time-blocks", response_model=list[TimeBlock])
def list_time_blocks(
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    return time_blocks.get_time_blocks(db, user_id, start_date, end_date)


@router.delete("/time-blocks/{block_id}")
def delete_time_block(
    block_id: int,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    if not time_blocks.delete_time_block(db, user_id, block_id):
        raise HTTPException(status_code=404, detail="Time block not found")
    return {"success": True}
