"""Media library endpoints (admin only)."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from ...errors import InvalidUpload
from ...models.domain import User
from ...persistence.base import Storage
from ...persistence.filesystem import FileStorage
from ...schemas.auth import MessageResponse
from ...schemas.media import LegacyUploadResponse, MediaModel, MediaUpdate
from ...services.media import check_upload_size, create_media_item, delete_media_item, store_upload
from ..deps import require_user, storage_dependency

logger = logging.getLogger(__name__)

router = APIRouter(tags=["media"])

READ_CHUNK_BYTES = 256 * 1024


def _upload_error(exc: InvalidUpload) -> HTTPException:
    code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE if exc.too_large else status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    return HTTPException(status_code=code, detail=str(exc))


async def _read_upload(image: UploadFile | None) -> tuple[str, str | None, bytes]:
    """Read the upload in chunks, stopping as soon as it passes the size limit."""
    if image is None or not image.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    chunks: list[bytes] = []
    total = 0
    try:
        if image.size is not None:
            check_upload_size(image.size)
        while True:
            chunk = await image.read(READ_CHUNK_BYTES)
            if not chunk:
                break
            total += len(chunk)
            check_upload_size(total)
            chunks.append(chunk)
    except InvalidUpload as exc:
        raise _upload_error(exc) from exc
    return image.filename, image.content_type, b"".join(chunks)


@router.get("/media", response_model=List[MediaModel], status_code=status.HTTP_200_OK)
def list_media(
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> List[MediaModel]:
    return [MediaModel.from_domain(item) for item in storage.list_media()]


@router.get("/media/{media_id}", response_model=MediaModel, status_code=status.HTTP_200_OK)
def get_media(
    media_id: str,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> MediaModel:
    item = storage.get_media(media_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    return MediaModel.from_domain(item)


@router.post("/media", response_model=MediaModel, status_code=status.HTTP_201_CREATED)
async def upload_media(
    image: UploadFile | None = File(default=None),
    user: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> MediaModel:
    filename, content_type, payload = await _read_upload(image)
    try:
        item = create_media_item(storage, filename, content_type, payload, uploaded_by=user.id, files=FileStorage())
    except InvalidUpload as exc:
        raise _upload_error(exc) from exc
    return MediaModel.from_domain(item)


@router.put("/media/{media_id}", response_model=MediaModel, status_code=status.HTTP_200_OK)
def update_media(
    media_id: str,
    payload: MediaUpdate,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> MediaModel:
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    item = storage.update_media(media_id, updates)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    return MediaModel.from_domain(item)


@router.delete("/media/{media_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_media(
    media_id: str,
    _: User = Depends(require_user),
    storage: Storage = Depends(storage_dependency),
) -> MessageResponse:
    item = storage.get_media(media_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    if not delete_media_item(storage, item, files=FileStorage()):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Media not found")
    return MessageResponse(message="Media deleted successfully")


@router.post("/upload", response_model=LegacyUploadResponse, status_code=status.HTTP_200_OK)
async def legacy_upload(
    image: UploadFile | None = File(default=None),
    _: User = Depends(require_user),
) -> LegacyUploadResponse:
    """Store a file without registering it in the media library."""
    filename, content_type, payload = await _read_upload(image)
    try:
        stored = store_upload(filename, content_type, payload, files=FileStorage())
    except InvalidUpload as exc:
        raise _upload_error(exc) from exc
    return LegacyUploadResponse(
        url=stored.url,
        filename=stored.filename,
        originalName=stored.original_name,
        size=stored.size,
    )
