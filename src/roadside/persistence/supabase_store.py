"""Durable storage backed by Supabase (PostgREST) tables."""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Mapping, Optional, Sequence, TypeVar

from ..errors import StorageError
from ..models.domain import Category, Location, MediaItem, NewLocation, Setting, User
from .base import CATEGORY_FIELDS, LOCATION_FIELDS, MEDIA_FIELDS, Storage, pick_fields, utc_now_iso

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _row_to_location(row: Mapping[str, Any]) -> Location:
    return Location(
        id=str(row["id"]),
        name=str(row["name"]),
        category=str(row["category"]),
        state=str(row["state"]),
        tagged_date=str(row.get("tagged_date") or ""),
        latitude=float(row.get("latitude") or 0),
        longitude=float(row.get("longitude") or 0),
        city=row.get("city") or "",
        zip_code=row.get("zip_code") or "",
        photo_url=row.get("photo_url") or "",
        photo_id=row.get("photo_id") or "",
        description=row.get("description") or "",
        custom_fields=row.get("custom_fields") or "{}",
    )


def _row_to_category(row: Mapping[str, Any]) -> Category:
    return Category(
        id=str(row["id"]),
        name=str(row["name"]),
        slug=str(row["slug"]),
        description=row.get("description") or "",
        icon=row.get("icon") or "📍",
        color=row.get("color") or "#f97316",
        display_order=float(row.get("display_order") or 0),
        created_at=str(row.get("created_at") or ""),
        updated_at=str(row.get("updated_at") or ""),
    )


def _row_to_media(row: Mapping[str, Any]) -> MediaItem:
    return MediaItem(
        id=str(row["id"]),
        filename=str(row["filename"]),
        original_name=str(row["original_name"]),
        url=str(row["url"]),
        mime_type=str(row["mime_type"]),
        size=str(row["size"]),
        width=row.get("width"),
        height=row.get("height"),
        alt=row.get("alt") or "",
        caption=row.get("caption") or "",
        uploaded_at=str(row.get("uploaded_at") or ""),
        uploaded_by=row.get("uploaded_by"),
    )


def _row_to_setting(row: Mapping[str, Any]) -> Setting:
    return Setting(
        key=str(row["key"]),
        value=str(row["value"]),
        updated_at=str(row.get("updated_at") or ""),
        updated_by=row.get("updated_by"),
    )


def _row_to_user(row: Mapping[str, Any]) -> User:
    return User(id=str(row["id"]), username=str(row["username"]), password_hash=str(row["password_hash"]))


class SupabaseStorage(Storage):
    """Reads and writes the ``users``, ``locations``, ``media``, ``settings``
    and ``categories`` tables through a Supabase client.

    Any client failure surfaces as :class:`StorageError`.
    """

    name = "supabase"

    def __init__(self, client: Any) -> None:
        if client is None:
            raise StorageError("Supabase backend selected but the client is not configured.")
        self._client = client

    def _execute(self, action: str, query: Any) -> list[dict]:
        try:
            response = query.execute()
        except Exception as exc:
            logger.error(f"Supabase {action} failed: {exc}")
            raise StorageError(f"Failed to {action}: {exc}") from exc
        return list(response.data or [])

    @staticmethod
    def _convert(rows: list[dict], converter: Callable[[Mapping[str, Any]], T]) -> list[T]:
        converted: list[T] = []
        for row in rows:
            try:
                converted.append(converter(row))
            except (KeyError, ValueError, TypeError) as e:
                # Skip invalid rows but continue processing
                logger.warning(f"Skipping invalid row: {e}")
        return converted

    def _first(self, rows: list[dict], converter: Callable[[Mapping[str, Any]], T]) -> Optional[T]:
        converted = self._convert(rows, converter)
        return converted[0] if converted else None

    def _table(self, name: str) -> Any:
        return self._client.table(name)

    # Users
    def get_user(self, user_id: str) -> Optional[User]:
        rows = self._execute("load user", self._table("users").select("*").eq("id", user_id).limit(1))
        return self._first(rows, _row_to_user)

    def get_user_by_username(self, username: str) -> Optional[User]:
        rows = self._execute("load user", self._table("users").select("*").eq("username", username).limit(1))
        return self._first(rows, _row_to_user)

    def create_user(self, username: str, password_hash: str) -> User:
        row = {"id": str(uuid.uuid4()), "username": username, "password_hash": password_hash}
        rows = self._execute("create user", self._table("users").insert(row))
        return self._first(rows, _row_to_user) or _row_to_user(row)

    def update_user_password(self, user_id: str, password_hash: str) -> bool:
        rows = self._execute(
            "update password",
            self._table("users").update({"password_hash": password_hash}).eq("id", user_id),
        )
        return bool(rows)

    # Locations
    def list_locations(self) -> Sequence[Location]:
        return self._convert(self._execute("list locations", self._table("locations").select("*")), _row_to_location)

    def get_location(self, location_id: str) -> Optional[Location]:
        rows = self._execute("load location", self._table("locations").select("*").eq("id", location_id).limit(1))
        return self._first(rows, _row_to_location)

    def create_location(self, draft: NewLocation) -> Location:
        row = {"id": str(uuid.uuid4()), **draft.to_dict()}
        rows = self._execute("create location", self._table("locations").insert(row))
        return self._first(rows, _row_to_location) or _row_to_location(row)

    def update_location(self, location_id: str, updates: Mapping[str, Any]) -> Optional[Location]:
        values = pick_fields(updates, LOCATION_FIELDS)
        if not values:
            return self.get_location(location_id)
        rows = self._execute("update location", self._table("locations").update(values).eq("id", location_id))
        return self._first(rows, _row_to_location)

    def delete_location(self, location_id: str) -> bool:
        rows = self._execute("delete location", self._table("locations").delete().eq("id", location_id))
        return bool(rows)

    # Media
    def list_media(self) -> Sequence[MediaItem]:
        rows = self._execute("list media", self._table("media").select("*").order("uploaded_at", desc=True))
        return self._convert(rows, _row_to_media)

    def get_media(self, media_id: str) -> Optional[MediaItem]:
        rows = self._execute("load media", self._table("media").select("*").eq("id", media_id).limit(1))
        return self._first(rows, _row_to_media)

    def create_media(self, fields: Mapping[str, Any]) -> MediaItem:
        row = {"id": str(uuid.uuid4()), "uploaded_at": utc_now_iso(), **pick_fields(fields, MEDIA_FIELDS)}
        rows = self._execute("create media", self._table("media").insert(row))
        return self._first(rows, _row_to_media) or _row_to_media(row)

    def update_media(self, media_id: str, updates: Mapping[str, Any]) -> Optional[MediaItem]:
        values = pick_fields(updates, MEDIA_FIELDS)
        if not values:
            return self.get_media(media_id)
        rows = self._execute("update media", self._table("media").update(values).eq("id", media_id))
        return self._first(rows, _row_to_media)

    def delete_media(self, media_id: str) -> bool:
        rows = self._execute("delete media", self._table("media").delete().eq("id", media_id))
        return bool(rows)

    # Settings
    def get_setting(self, key: str) -> Optional[Setting]:
        rows = self._execute("load setting", self._table("settings").select("*").eq("key", key).limit(1))
        return self._first(rows, _row_to_setting)

    def set_setting(self, key: str, value: str, updated_by: Optional[str] = None) -> Setting:
        row = {"key": key, "value": value, "updated_at": utc_now_iso(), "updated_by": updated_by}
        rows = self._execute("save setting", self._table("settings").upsert(row))
        return self._first(rows, _row_to_setting) or _row_to_setting(row)

    def list_settings(self) -> Sequence[Setting]:
        return self._convert(self._execute("list settings", self._table("settings").select("*")), _row_to_setting)

    # Categories
    def list_categories(self) -> Sequence[Category]:
        rows = self._execute("list categories", self._table("categories").select("*").order("display_order"))
        return self._convert(rows, _row_to_category)

    def get_category(self, category_id: str) -> Optional[Category]:
        rows = self._execute("load category", self._table("categories").select("*").eq("id", category_id).limit(1))
        return self._first(rows, _row_to_category)

    def get_category_by_slug(self, slug: str) -> Optional[Category]:
        rows = self._execute("load category", self._table("categories").select("*").eq("slug", slug).limit(1))
        return self._first(rows, _row_to_category)

    def create_category(self, fields: Mapping[str, Any]) -> Category:
        now = utc_now_iso()
        row = {"id": str(uuid.uuid4()), "created_at": now, "updated_at": now, **pick_fields(fields, CATEGORY_FIELDS)}
        rows = self._execute("create category", self._table("categories").insert(row))
        return self._first(rows, _row_to_category) or _row_to_category(row)

    def update_category(self, category_id: str, updates: Mapping[str, Any]) -> Optional[Category]:
        values = {**pick_fields(updates, CATEGORY_FIELDS), "updated_at": utc_now_iso()}
        rows = self._execute("update category", self._table("categories").update(values).eq("id", category_id))
        return self._first(rows, _row_to_category)

    def delete_category(self, category_id: str) -> bool:
        rows = self._execute("delete category", self._table("categories").delete().eq("id", category_id))
        return bool(rows)
