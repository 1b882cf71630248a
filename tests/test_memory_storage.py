import pytest

from roadside.models.domain import NewLocation
from roadside.persistence.memory import MemoryStorage
from roadside.services.auth import verify_password
from roadside.services.seed import DEFAULT_CATEGORIES, SAMPLE_LOCATIONS, seed_defaults


def _draft(name: str = "Gemini Giant", category: str = "muffler-men") -> NewLocation:
    return NewLocation(name=name, category=category, state="Illinois", tagged_date="2024-02-14", city="Wilmington")


def test_location_lifecycle():
    storage = MemoryStorage()

    created = storage.create_location(_draft())
    assert created.id
    assert storage.get_location(created.id) == created

    updated = storage.update_location(created.id, {"name": "Gemini Giant II", "id": "hijack"})
    assert updated is not None
    assert updated.id == created.id
    assert updated.name == "Gemini Giant II"
    assert updated.city == "Wilmington"

    assert storage.delete_location(created.id) is True
    assert storage.get_location(created.id) is None
    assert storage.delete_location(created.id) is False
    assert storage.update_location(created.id, {"name": "gone"}) is None


def test_locations_keep_insertion_order():
    storage = MemoryStorage()
    names = ["A", "B", "C"]
    for name in names:
        storage.create_location(_draft(name))

    assert [location.name for location in storage.list_locations()] == names


def test_categories_sorted_by_display_order_and_slug_unique():
    storage = MemoryStorage()
    storage.create_category({"name": "Second", "slug": "second", "display_order": 2})
    storage.create_category({"name": "First", "slug": "first", "display_order": 1})

    assert [category.slug for category in storage.list_categories()] == ["first", "second"]
    assert storage.get_category_by_slug("second").name == "Second"
    with pytest.raises(ValueError):
        storage.create_category({"name": "Dup", "slug": "first"})


def test_update_category_refreshes_timestamp():
    storage = MemoryStorage()
    category = storage.create_category({"name": "Old", "slug": "old"})

    updated = storage.update_category(category.id, {"name": "New", "created_at": "nope"})

    assert updated.name == "New"
    assert updated.created_at == category.created_at
    assert updated.updated_at >= category.updated_at


def test_settings_upsert():
    storage = MemoryStorage()
    storage.set_setting("logo", "/uploads/a.png", updated_by="u1")
    storage.set_setting("logo", "/uploads/b.png")

    assert storage.get_setting("logo").value == "/uploads/b.png"
    assert len(storage.list_settings()) == 1


def test_media_listing_is_newest_first(monkeypatch):
    from roadside.persistence import memory as memory_module

    stamps = iter(["2024-01-01T00:00:00+00:00", "2024-01-02T00:00:00+00:00"])
    monkeypatch.setattr(memory_module, "utc_now_iso", lambda: next(stamps))
    storage = MemoryStorage()
    first = storage.create_media(
        {"filename": "1.png", "original_name": "a.png", "url": "/uploads/1.png", "mime_type": "image/png", "size": "10"}
    )
    second = storage.create_media(
        {"filename": "2.png", "original_name": "b.png", "url": "/uploads/2.png", "mime_type": "image/png", "size": "10"}
    )
    storage.update_media(first.id, {"uploaded_at": "ignored", "alt": "first"})

    listed = storage.list_media()
    assert [item.id for item in listed] == [second.id, first.id]
    assert storage.get_media(first.id).alt == "first"


def test_users_and_passwords():
    storage = MemoryStorage()
    user = storage.create_user("admin", "hash-1")

    assert storage.get_user_by_username("admin") == user
    assert storage.update_user_password(user.id, "hash-2") is True
    assert storage.get_user(user.id).password_hash == "hash-2"
    assert storage.update_user_password("missing", "x") is False


def test_seed_defaults_is_idempotent():
    storage = MemoryStorage()
    seed_defaults(storage, include_samples=True)
    seed_defaults(storage, include_samples=True)

    assert len(storage.list_categories()) == len(DEFAULT_CATEGORIES)
    assert len(storage.list_locations()) == len(SAMPLE_LOCATIONS)
    admin = storage.get_user_by_username("admin")
    assert admin is not None
    assert verify_password(admin.password_hash, "admin123")
    assert admin.password_hash != "admin123"
