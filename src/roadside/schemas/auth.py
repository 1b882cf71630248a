"""Authentication request/response models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class ChangePasswordRequest(BaseModel):
    currentPassword: Optional[str] = None
    newPassword: Optional[str] = None


class UserModel(BaseModel):
    id: str
    username: str


class SessionResponse(BaseModel):
    message: Optional[str] = None
    user: UserModel


class MessageResponse(BaseModel):
    message: str
