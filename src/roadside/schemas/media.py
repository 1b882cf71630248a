"""Media library and site settings schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ..models.domain import MediaItem


class MediaModel(BaseModel):
    id: str
    filename: str
    originalName: str
    url: str
    mimeType: str
    size: str
    width: Optional[str] = None
    height: Optional[str] = None
    alt: str
    caption: str
    uploadedAt: str
    uploadedBy: Optional[str] = None

    @classmethod
    def from_domain(cls, item: MediaItem) -> "MediaModel":
        return cls(
            id=item.id,
            filename=item.filename,
            originalName=item.original_name,
            url=item.url,
            mimeType=item.mime_type,
            size=item.size,
            width=item.width,
            height=item.height,
            alt=item.alt or "",
            caption=item.caption or "",
            uploadedAt=item.uploaded_at,
            uploadedBy=item.uploaded_by,
        )


class MediaUpdate(BaseModel):
    alt: Optional[str] = None
    caption: Optional[str] = None


class LegacyUploadResponse(BaseModel):
    url: str
    filename: str
    originalName: str
    size: int


class SettingModel(BaseModel):
    key: str
    value: str


class SettingUpdate(BaseModel):
    value: Optional[str] = None
