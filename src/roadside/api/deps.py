"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status

from ..models.domain import User
from ..persistence import get_storage
from ..persistence.base import Storage

SESSION_USER_KEY = "user_id"


def storage_dependency() -> Storage:
    return get_storage()


def current_user_id(request: Request) -> str | None:
    return request.session.get(SESSION_USER_KEY)


def require_user(request: Request, storage: Storage = Depends(storage_dependency)) -> User:
    """Reject the request with 401 unless the session belongs to a known user."""
    user_id = current_user_id(request)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    user = storage.get_user(user_id)
    if user is None:
        request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user
