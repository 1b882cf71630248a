"""Password hashing and credential checks for admin accounts."""

from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..models.domain import User
from ..persistence.base import Storage

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def authenticate(storage: Storage, username: str, password: str) -> Optional[User]:
    """Return the user when the credentials match, else None."""
    user = storage.get_user_by_username(username)
    if user is None or not verify_password(user.password_hash, password):
        logger.warning("Failed login attempt for username '%s'", username)
        return None
    return user


def change_password(storage: Storage, user: User, new_password: str) -> bool:
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")
    return storage.update_user_password(user.id, hash_password(new_password))
