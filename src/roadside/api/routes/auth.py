"""Admin session endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ...models.domain import User
from ...persistence.base import Storage
from ...schemas.auth import ChangePasswordRequest, LoginRequest, MessageResponse, SessionResponse, UserModel
from ...services.auth import MIN_PASSWORD_LENGTH, authenticate, change_password, verify_password
from ..deps import SESSION_USER_KEY, current_user_id, require_user, storage_dependency

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionResponse, status_code=status.HTTP_200_OK)
def login(
    payload: LoginRequest,
    request: Request,
    storage: Storage = Depends(storage_dependency),
) -> SessionResponse:
    if not payload.username or not payload.password:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username and password are required")

    user = authenticate(storage, payload.username, payload.password)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    request.session[SESSION_USER_KEY] = user.id
    return SessionResponse(message="Login successful", user=UserModel(id=user.id, username=user.username))


@router.post("/logout", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def logout(request: Request) -> MessageResponse:
    request.session.clear()
    return MessageResponse(message="Logout successful")


@router.get("/me", response_model=SessionResponse, status_code=status.HTTP_200_OK)
def me(request: Request, storage: Storage = Depends(storage_dependency)) -> SessionResponse:
    user_id = current_user_id(request)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    user = storage.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return SessionResponse(user=UserModel(id=user.id, username=user.username))


@router.post("/change-password", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def update_password(
    payload: ChangePasswordRequest,
    user: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> MessageResponse:
    if not payload.currentPassword or not payload.newPassword:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password and new password are required",
        )
    if len(payload.newPassword) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )
    if not verify_password(user.password_hash, payload.currentPassword):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Current password is incorrect")

    try:
        updated = change_password(storage, user, payload.newPassword)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if not updated:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update password")
    return MessageResponse(message="Password changed successfully")
