from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from db import get_session
from deps import current_user_id
from models import as_utc
from services import calendar

router = APIRouter(prefix="/api", tags=["calendar"])


@router.get("/calendar")
def get_calendar(
    start_date: datetime,
    end_date: datetime,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """Tasks due, events starting and time blocks starting within the range."""
    if as_utc(end_date) < as_utc(start_date):
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")
    return calendar.get_calendar_data(db, user_id, start_date, end_date)
