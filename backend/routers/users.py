"""
Account creation. Authentication is out of scope: other routes trust X-User-Id.
"""
from fastapi import APIRouter, Depends
from sqlmodel import Session

from db import get_session
from models import UserRead
from schemas import UserCreate
from services import users

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users", response_model=UserRead, status_code=201)
def create_user(req: UserCreate, db: Session = Depends(get_session)):
    """Register a user. Email and username must both be unused."""
    return users.create_user(db, req)
