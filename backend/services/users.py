import hashlib
import logging
import os

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, or_, select

from errors import ConflictError
from models import User
from schemas import UserCreate

logger = logging.getLogger(__name__)

_HASH_NAME = "sha256"
_ITERATIONS = 240_000


def hash_password(password: str) -> str:
    """Salted PBKDF2 hash, stored as algorithm$iterations$salt$digest."""
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac(_HASH_NAME, password.encode(), salt, _ITERATIONS)
    return f"pbkdf2_{_HASH_NAME}${_ITERATIONS}${salt.hex()}${digest.hex()}"


def create_user(db: Session, data: UserCreate) -> User:
    statement = select(User).where(or_(User.email == data.email, User.username == data.username))
    existing = db.exec(statement).first()
    if existing is not None:
        field = "email" if existing.email == data.email else "username"
        raise ConflictError(f"A user with this {field} already exists")

    user = User(
        email=data.email,
        username=data.username,
        password_hash=hash_password(data.password),
        timezone=data.timezone,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with another signup for the same email/username.
        db.rollback()
        raise ConflictError("A user with this email or username already exists")
    db.refresh(user)
    logger.info("Created user %s (%s)", user.id, user.username)
    return user
