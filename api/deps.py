# api/deps.py
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request

from core.access import Actor
from core.auth_service import get_user_by_id
from core.context import AppContext


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_db(context: AppContext = Depends(get_context)):
    """One SQLAlchemy session per request."""
    db = context.session()
    try:
        yield db
    finally:
        db.close()


def get_actor(x_user_id: Optional[str] = Header(default=None), db=Depends(get_db)) -> Actor:
    """
    The caller's identity comes from the gateway/session layer as X-User-Id.
    The role is never taken from the request: it is read from the users table.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    try:
        user_id = int(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user id")
    user = get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    return Actor.from_user(user)
