"""
Pomodoro sessions: start, pause/resume/complete/cancel, list recent ones,
and the daily productivity stats that completed sessions feed.
"""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from db import get_session
from deps import current_user_id
from models import PomodoroSession, ProductivityStats
from schemas import PomodoroSessionCreate, PomodoroSessionUpdate
from services import pomodoro, stats

router = APIRouter(prefix="/api", tags=["sessions"])


@router.post("/sessions", response_model=PomodoroSession, status_code=201)
def start_session(
    req: PomodoroSessionCreate,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """Start a Pomodoro session. It begins in the running state."""
    return pomodoro.create_session(
        db,
        user_id,
        duration=req.duration,
        break_duration=req.break_duration,
        task_id=req.task_id,
    )


@router.patch("/sessions/{session_id}", response_model=PomodoroSession)
def update_session(
    session_id: int,
    req: PomodoroSessionUpdate,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """Pause, resume, complete or cancel a session."""
    return pomodoro.update_session_status(
        db, session_id, req.status, completed_at=req.completed_at, user_id=user_id
    )


@router.get("/sessions", response_model=list[PomodoroSession])
def list_sessions(
    limit: int = 20,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """List recent sessions (newest first) for this user."""
    return pomodoro.get_sessions(db, user_id)[:limit]


# --- Stats ---


def _check_range(start_date: date, end_date: date) -> None:
    if end_date < start_date:
        raise HTTPException(status_code=422, detail="end_date must not be before start_date")


@router.get("/stats", response_model=list[ProductivityStats])
def get_stats(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """Daily stats rows for this user between the two dates (inclusive)."""
    _check_range(start_date, end_date)
    return stats.get_productivity_stats(db, user_id, start_date, end_date)


@router.get("/stats/summary")
def get_stats_summary(
    start_date: date,
    end_date: date,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """Totals of every counter over the range, plus how many days had activity."""
    _check_range(start_date, end_date)
    rows = stats.get_productivity_stats(db, user_id, start_date, end_date)
    return stats.summarize(rows)
