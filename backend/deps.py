from fastapi import Header, HTTPException


def current_user_id(user_id: int | None = Header(default=None, alias="X-User-Id")) -> int:
    """The acting user, passed explicitly on every per-user request."""
    if user_id is None:
        raise HTTPException(status_code=400, detail="Missing X-User-Id header")
    return user_id
