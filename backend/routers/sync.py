"""
Sync for offline-first clients, and full backups.
"""
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlmodel import Session

from db import get_session
from deps import current_user_id
from services import sync

router = APIRouter(prefix="/api", tags=["sync"])


@router.get("/sync")
def sync_user_data(
    since: datetime | None = None,
    db: Session = Depends(get_session),
    user_id: int = Depends(current_user_id),
):
    """
    Everything changed after `since` (or everything, when omitted).
    Send the returned last_sync_timestamp as `since` on the next call.
    """
    return sync.sync_user_data(db, user_id, since)


@router.post("/backup")
def backup_user_data(db: Session = Depends(get_session), user_id: int = Depends(current_user_id)):
    return sync.backup_user_data(db, user_id)
