"""Media library: validating, storing, measuring and recovering uploaded images."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image

from ..config import settings
from ..errors import InvalidUpload
from ..models.domain import MediaItem
from ..persistence.base import Storage
from ..persistence.filesystem import FileStorage

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"


@dataclass(slots=True)
class StoredFile:
    filename: str
    original_name: str
    url: str
    mime_type: str
    size: int
    path: Path


def _extension(filename: str) -> str:
    return Path(filename).suffix.lower().lstrip(".")


def check_upload_size(size: int) -> None:
    if size > settings.max_upload_bytes:
        raise InvalidUpload(
            f"File is too large ({size} bytes); the limit is {settings.max_upload_bytes} bytes",
            too_large=True,
        )


def validate_image(original_name: str, mime_type: Optional[str], size: int) -> None:
    """Both the extension and the MIME subtype must be an allowed image type."""
    allowed = {ext.lower().lstrip(".") for ext in settings.allowed_image_extensions}
    mime = (mime_type or "").lower()
    mime_ok = mime.startswith("image/") and mime.split("/", 1)[1] in allowed
    if _extension(original_name) not in allowed or not mime_ok:
        raise InvalidUpload(f"Only image files are allowed ({', '.join(sorted(allowed))})")
    check_upload_size(size)


def read_dimensions(path: Path) -> tuple[Optional[str], Optional[str]]:
    """Return (width, height) as strings, or (None, None) when unreadable."""
    try:
        with Image.open(path) as image:
            width, height = image.size
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        logger.warning("Could not get image dimensions for %s: %s", path.name, exc)
        return None, None
    return str(width), str(height)


def store_upload(
    original_name: str,
    mime_type: Optional[str],
    payload: bytes,
    files: Optional[FileStorage] = None,
) -> StoredFile:
    """Validate and write an upload to disk under a unique name."""
    validate_image(original_name, mime_type, len(payload))
    files = files or FileStorage()
    filename = files.unique_filename(original_name)
    path = files.write_bytes(filename, payload)
    return StoredFile(
        filename=filename,
        original_name=original_name,
        url=f"{UPLOADS_URL_PREFIX}/{filename}",
        mime_type=mime_type or "application/octet-stream",
        size=len(payload),
        path=path,
    )


def create_media_item(
    storage: Storage,
    original_name: str,
    mime_type: Optional[str],
    payload: bytes,
    uploaded_by: Optional[str] = None,
    files: Optional[FileStorage] = None,
) -> MediaItem:
    stored = store_upload(original_name, mime_type, payload, files)
    width, height = read_dimensions(stored.path)
    try:
        item = storage.create_media(
            {
                "filename": stored.filename,
                "original_name": stored.original_name,
                "url": stored.url,
                "mime_type": stored.mime_type,
                "size": str(stored.size),
                "width": width,
                "height": height,
                "alt": "",
                "caption": "",
                "uploaded_by": uploaded_by,
            }
        )
    except Exception:
        stored.path.unlink(missing_ok=True)
        raise
    logger.info("Media item %s created from %s", item.id, original_name)
    return item


def delete_media_item(storage: Storage, item: MediaItem, files: Optional[FileStorage] = None) -> bool:
    """Remove the file (if still on disk) and then the library record."""
    files = files or FileStorage()
    if files.delete(item.filename):
        logger.info("Deleted media file %s", item.filename)
    return storage.delete_media(item.id)


@dataclass(slots=True)
class RecoveryReport:
    scanned: int = 0
    already_registered: int = 0
    recovered: int = 0
    failed: int = 0


def recover_orphaned_media(storage: Storage, files: Optional[FileStorage] = None) -> RecoveryReport:
    """Register image files in the uploads directory that have no media record."""
    files = files or FileStorage()
    allowed = {ext.lower().lstrip(".") for ext in settings.allowed_image_extensions}
    images = [path for path in files.list_files() if _extension(path.name) in allowed]
    known = {item.filename for item in storage.list_media()}

    report = RecoveryReport(scanned=len(images))
    for path in images:
        if path.name in known:
            report.already_registered += 1
            continue
        try:
            width, height = read_dimensions(path)
            storage.create_media(
                {
                    "filename": path.name,
                    "original_name": path.name,
                    "url": f"{UPLOADS_URL_PREFIX}/{path.name}",
                    "mime_type": mimetypes.guess_type(path.name)[0] or "image/jpeg",
                    "size": str(path.stat().st_size),
                    "width": width,
                    "height": height,
                    "alt": "",
                    "caption": "",
                    "uploaded_by": None,
                }
            )
        except Exception as exc:
            logger.error("Failed to recover %s: %s", path.name, exc)
            report.failed += 1
            continue
        report.recovered += 1

    logger.info(
        "Media recovery complete: %d recovered, %d failed, %d already registered",
        report.recovered,
        report.failed,
        report.already_registered,
    )
    return report
