"""Domain models for locations, categories, media and site settings."""

from dataclasses import asdict, dataclass, field
from typing import Optional


@dataclass(slots=True)
class NewLocation:
    """Fields required to create a location; the store assigns the id."""

    name: str
    category: str
    state: str
    tagged_date: str
    latitude: float = 0.0
    longitude: float = 0.0
    city: str = ""
    zip_code: str = ""
    photo_url: str = ""
    photo_id: str = ""
    description: str = ""
    custom_fields: str = "{}"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class Location:
    """Represents a cataloged roadside attraction."""

    id: str
    name: str
    category: str
    state: str
    tagged_date: str
    latitude: float = 0.0
    longitude: float = 0.0
    city: str = ""
    zip_code: str = ""
    photo_url: str = ""
    photo_id: str = ""
    description: str = ""
    custom_fields: str = "{}"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class Category:
    """Admin-defined classification referenced by locations through its slug."""

    id: str
    name: str
    slug: str
    description: str = ""
    icon: str = "📍"
    color: str = "#f97316"
    display_order: float = 0
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class MediaItem:
    """An uploaded image registered in the media library."""

    id: str
    filename: str
    original_name: str
    url: str
    mime_type: str
    size: str
    width: Optional[str] = None
    height: Optional[str] = None
    alt: str = ""
    caption: str = ""
    uploaded_at: str = ""
    uploaded_by: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True)
class Setting:
    key: str
    value: str
    updated_at: str = ""
    updated_by: Optional[str] = None


@dataclass(slots=True)
class User:
    id: str
    username: str
    password_hash: str


@dataclass(slots=True)
class BulkImportResult:
    """Outcome of one bulk import run. Errors are ordered by input line."""

    success: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def record_success(self) -> None:
        self.success += 1

    def record_failure(self, line_number: int, message: str) -> None:
        self.failed += 1
        self.errors.append(f"Line {line_number}: {message}")

    def to_dict(self) -> dict:
        return {"success": self.success, "failed": self.failed, "errors": list(self.errors)}
