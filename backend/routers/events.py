from fastapi import APIRouter, Depends
from sqlmodel import Session

from db import get_session
from deps import current_user_id
from models import Event
from schemas import EventCreate, EventUpdate
from services import events

router = APIRouter(prefix="/api", tags=["events"])


@router.post("/events", response_model=Event, status_code=201)
def create_event(
    req: EventCreate,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    return events.create_event(db, user_id, req)


@router.get("/events", response_model=list[Event])
def list_events(db: Session = Depends(get_session), user_id: int = Depends(current_user_id)):
    return events.get_events(db, user_id)


@router.patch("/events/{event_id}", response_model=Event)
def update_event(
    event_id: int,
    req: EventUpdate,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    return events.update_event(db, user_id, event_id, req)


@router.delete("/events/{event_id}")
def delete_event(
    event_id: int,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """success is false when the event is missing or belongs to someone else."""
    return {"success": events.delete_event(db, user_id, event_id)}
