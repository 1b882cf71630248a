"""Site settings endpoints (e.g. logo URL)."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from ...models.domain import User
from ...persistence.base import Storage
from ...schemas.media import SettingModel, SettingUpdate
from ..deps import require_user, storage_dependency

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", status_code=status.HTTP_200_OK)
def list_settings(storage: Storage = Depends(storage_dependency)) -> dict[str, str]:
    return {setting.key: setting.value for setting in storage.list_settings()}


@router.get("/{key}", response_model=SettingModel, status_code=status.HTTP_200_OK)
def get_setting(key: str, storage: Storage = Depends(storage_dependency)) -> SettingModel:
    setting = storage.get_setting(key)
    if setting is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Setting not found")
    return SettingModel(key=setting.key, value=setting.value)


@router.put("/{key}", response_model=SettingModel, status_code=status.HTTP_200_OK)
def update_setting(
    key: str,
    payload: SettingUpdate,
    user: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> SettingModel:
    if not payload.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Value is required")
    setting = storage.set_setting(key, payload.value, updated_by=user.id)
    return SettingModel(key=setting.key, value=setting.value)
