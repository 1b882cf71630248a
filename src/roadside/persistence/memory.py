"""Ephemeral dictionary-backed storage for development and tests."""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from typing import Any, Mapping, Optional, Sequence

from ..models.domain import Category, Location, MediaItem, NewLocation, Setting, User
from .base import CATEGORY_FIELDS, LOCATION_FIELDS, MEDIA_FIELDS, Storage, pick_fields, utc_now_iso


class MemoryStorage(Storage):
    """Keeps every entity in process memory; contents vanish on restart."""

    name = "memory"

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._users: dict[str, User] = {}
        self._locations: dict[str, Location] = {}
        self._media: dict[str, MediaItem] = {}
        self._settings: dict[str, Setting] = {}
        self._categories: dict[str, Category] = {}

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    # Users
    def get_user(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((user for user in self._users.values() if user.username == username), None)

    def create_user(self, username: str, password_hash: str) -> User:
        with self._lock:
            if self.get_user_by_username(username):
                raise ValueError(f"User '{username}' already exists")
            user = User(id=self._new_id(), username=username, password_hash=password_hash)
            self._users[user.id] = user
            return user

    def update_user_password(self, user_id: str, password_hash: str) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            self._users[user_id] = replace(user, password_hash=password_hash)
            return True

    # Locations
    def list_locations(self) -> Sequence[Location]:
        return list(self._locations.values())

    def get_location(self, location_id: str) -> Optional[Location]:
        return self._locations.get(location_id)

    def create_location(self, draft: NewLocation) -> Location:
        with self._lock:
            location = Location(id=self._new_id(), **draft.to_dict())
            self._locations[location.id] = location
            return location

    def update_location(self, location_id: str, updates: Mapping[str, Any]) -> Optional[Location]:
        with self._lock:
            location = self._locations.get(location_id)
            if location is None:
                return None
            updated = replace(location, **pick_fields(updates, LOCATION_FIELDS))
            self._locations[location_id] = updated
            return updated

    def delete_location(self, location_id: str) -> bool:
        with self._lock:
            return self._locations.pop(location_id, None) is not None

    # Media
    def list_media(self) -> Sequence[MediaItem]:
        return sorted(self._media.values(), key=lambda item: item.uploaded_at, reverse=True)

    def get_media(self, media_id: str) -> Optional[MediaItem]:
        return self._media.get(media_id)

    def create_media(self, fields: Mapping[str, Any]) -> MediaItem:
        with self._lock:
            item = MediaItem(id=self._new_id(), uploaded_at=utc_now_iso(), **pick_fields(fields, MEDIA_FIELDS))
            self._media[item.id] = item
            return item

    def update_media(self, media_id: str, updates: Mapping[str, Any]) -> Optional[MediaItem]:
        with self._lock:
            item = self._media.get(media_id)
            if item is None:
                return None
            updated = replace(item, **pick_fields(updates, MEDIA_FIELDS))
            self._media[media_id] = updated
            return updated

    def delete_media(self, media_id: str) -> bool:
        with self._lock:
            return self._media.pop(media_id, None) is not None

    # Settings
    def get_setting(self, key: str) -> Optional[Setting]:
        return self._settings.get(key)

    def set_setting(self, key: str, value: str, updated_by: Optional[str] = None) -> Setting:
        with self._lock:
            setting = Setting(key=key, value=value, updated_at=utc_now_iso(), updated_by=updated_by)
            self._settings[key] = setting
            return setting

    def list_settings(self) -> Sequence[Setting]:
        return list(self._settings.values())

    # Categories
    def list_categories(self) -> Sequence[Category]:
        return sorted(self._categories.values(), key=lambda category: category.display_order or 0)

    def get_category(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        return next((category for category in self._categories.values() if category.slug == slug), None)

    def create_category(self, fields: Mapping[str, Any]) -> Category:
        with self._lock:
            values = pick_fields(fields, CATEGORY_FIELDS)
            if self.get_category_by_slug(values.get("slug", "")):
                raise ValueError(f"Category slug '{values['slug']}' already exists")
            now = utc_now_iso()
            category = Category(id=self._new_id(), created_at=now, updated_at=now, **values)
            self._categories[category.id] = category
            return category

    def update_category(self, category_id: str, updates: Mapping[str, Any]) -> Optional[Category]:
        with self._lock:
            category = self._categories.get(category_id)
            if category is None:
                return None
            updated = replace(category, updated_at=utc_now_iso(), **pick_fields(updates, CATEGORY_FIELDS))
            self._categories[category_id] = updated
            return updated

    def delete_category(self, category_id: str) -> bool:
        with self._lock:
            return self._categories.pop(category_id, None) is not None
