"""Storage contract shared by the in-memory and Supabase backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

from ..models.domain import Category, Location, MediaItem, NewLocation, Setting, User

LOCATION_FIELDS = frozenset(NewLocation.__dataclass_fields__)
CATEGORY_FIELDS = frozenset({"name", "slug", "description", "icon", "color", "display_order"})
MEDIA_FIELDS = frozenset(
    {"filename", "original_name", "url", "mime_type", "size", "width", "height", "alt", "caption", "uploaded_by"}
)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def pick_fields(updates: Mapping[str, Any], allowed: frozenset[str]) -> dict[str, Any]:
    """Drop keys a partial update is not allowed to touch (ids, timestamps)."""
    return {key: value for key, value in updates.items() if key in allowed}


class Storage(ABC):
    """Get/list/create/update/delete per entity type."""

    name: str = "abstract"

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def create_user(self, username: str, password_hash: str) -> User:
        raise NotImplementedError

    @abstractmethod
    def update_user_password(self, user_id: str, password_hash: str) -> bool:
        raise NotImplementedError

    # Locations
    @abstractmethod
    def list_locations(self) -> Sequence[Location]:
        raise NotImplementedError

    @abstractmethod
    def get_location(self, location_id: str) -> Optional[Location]:
        raise NotImplementedError

    @abstractmethod
    def create_location(self, draft: NewLocation) -> Location:
        raise NotImplementedError

    @abstractmethod
    def update_location(self, location_id: str, updates: Mapping[str, Any]) -> Optional[Location]:
        raise NotImplementedError

    @abstractmethod
    def delete_location(self, location_id: str) -> bool:
        raise NotImplementedError

    # Media
    @abstractmethod
    def list_media(self) -> Sequence[MediaItem]:
        """Newest upload first."""
        raise NotImplementedError

    @abstractmethod
    def get_media(self, media_id: str) -> Optional[MediaItem]:
        raise NotImplementedError

    @abstractmethod
    def create_media(self, fields: Mapping[str, Any]) -> MediaItem:
        raise NotImplementedError

    @abstractmethod
    def update_media(self, media_id: str, updates: Mapping[str, Any]) -> Optional[MediaItem]:
        raise NotImplementedError

    @abstractmethod
    def delete_media(self, media_id: str) -> bool:
        raise NotImplementedError

    # Settings
    @abstractmethod
    def get_setting(self, key: str) -> Optional[Setting]:
        raise NotImplementedError

    @abstractmethod
    def set_setting(self, key: str, value: str, updated_by: Optional[str] = None) -> Setting:
        raise NotImplementedError

    @abstractmethod
    def list_settings(self) -> Sequence[Setting]:
        raise NotImplementedError

    # Categories
    @abstractmethod
    def list_categories(self) -> Sequence[Category]:
        """Ordered by ascending display order."""
        raise NotImplementedError

    @abstractmethod
    def get_category(self, category_id: str) -> Optional[Category]:
        raise NotImplementedError

    @abstractmethod
    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        raise NotImplementedError

    @abstractmethod
    def create_category(self, fields: Mapping[str, Any]) -> Category:
        raise NotImplementedError

    @abstractmethod
    def update_category(self, category_id: str, updates: Mapping[str, Any]) -> Optional[Category]:
        raise NotImplementedError

    @abstractmethod
    def delete_category(self, category_id: str) -> bool:
        raise NotImplementedError
