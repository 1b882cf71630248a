"""Exception types raised by the storage and service layers."""

from __future__ import annotations


class RoadsideError(Exception):
    """Base class for application errors."""


class StorageError(RoadsideError):
    """Raised when the persistence backend fails or is misconfigured."""


class InvalidImportContent(RoadsideError, ValueError):
    """Raised when a bulk import payload is not text at all."""


class InvalidUpload(RoadsideError):
    """Raised when an uploaded file is rejected before it is stored."""

    def __init__(self, message: str, *, too_large: bool = False) -> None:
        super().__init__(message)
        self.too_large = too_large
