from fastapi import APIRouter, Depends
from sqlmodel import Session

from db import get_session
from deps import current_user_id
from models import Reminder
from schemas import ReminderCreate
from services import reminders

router = APIRouter(prefix="/api", tags=["reminders"])


@router.post("/reminders", response_model=Reminder, status_code=201)
def create_reminder(
    req: ReminderCreate,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """Set a reminder on one task or one event (not both)."""
    return reminders.create_reminder(db, user_id, req)


@router.get("/reminders", response_model=list[Reminder])
def list_due_reminders(db: Session = Depends(get_session), user_id: int = Depends(current_user_id)):
    """Reminders that are due and not yet sent."""
    return reminders.get_reminders(db, user_id)
