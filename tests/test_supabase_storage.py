from types import SimpleNamespace

import pytest

from roadside.errors import StorageError
from roadside.models.domain import NewLocation
from roadside.persistence.supabase_store import SupabaseStorage


class FakeQuery:
    """Mimics the fluent PostgREST builder over a list of dict rows."""

    def __init__(self, rows: list[dict], fail: bool = False) -> None:
        self._rows = rows
        self._fail = fail
        self._op = "select"
        self._payload: dict | None = None
        self._filters: list[tuple[str, object]] = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def select(self, *_columns):
        self._op = "select"
        return self

    def insert(self, row):
        self._op, self._payload = "insert", dict(row)
        return self

    def upsert(self, row):
        self._op, self._payload = "upsert", dict(row)
        return self

    def update(self, values):
        self._op, self._payload = "update", dict(values)
        return self

    def delete(self):
        self._op = "delete"
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def _matching(self) -> list[dict]:
        return [row for row in self._rows if all(row.get(col) == val for col, val in self._filters)]

    def execute(self):
        if self._fail:
            raise RuntimeError("connection refused")
        if self._op == "insert":
            self._rows.append(self._payload)
            return SimpleNamespace(data=[dict(self._payload)])
        if self._op == "upsert":
            self._rows[:] = [row for row in self._rows if row.get("key") != self._payload.get("key")]
            self._rows.append(self._payload)
            return SimpleNamespace(data=[dict(self._payload)])
        matched = self._matching()
        if self._op == "update":
            for row in matched:
                row.update(self._payload)
        elif self._op == "delete":
            self._rows[:] = [row for row in self._rows if row not in matched]
        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: row.get(column) or 0, reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return SimpleNamespace(data=[dict(row) for row in matched])


class FakeClient:
    def __init__(self, fail: bool = False) -> None:
        self.tables: dict[str, list[dict]] = {}
        self.fail = fail

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self.tables.setdefault(name, []), fail=self.fail)


def _draft(name: str = "Cadillac Ranch") -> NewLocation:
    return NewLocation(
        name=name,
        category="unique-finds",
        state="Texas",
        tagged_date="2023-10-22",
        custom_fields='{"cars": "10 Cadillacs"}',
    )


def test_location_round_trip_uses_snake_case_columns():
    client = FakeClient()
    storage = SupabaseStorage(client)

    created = storage.create_location(_draft())
    row = client.tables["locations"][0]

    assert row["custom_fields"] == '{"cars": "10 Cadillacs"}'
    assert row["tagged_date"] == "2023-10-22"
    assert storage.get_location(created.id) == created
    assert [location.name for location in storage.list_locations()] == ["Cadillac Ranch"]

    updated = storage.update_location(created.id, {"city": "Amarillo"})
    assert updated.city == "Amarillo"
    assert storage.delete_location(created.id) is True
    assert storage.delete_location(created.id) is False


def test_invalid_rows_are_skipped():
    client = FakeClient()
    client.tables["locations"] = [{"id": "broken"}]
    storage = SupabaseStorage(client)
    storage.create_location(_draft("Valid"))

    assert [location.name for location in storage.list_locations()] == ["Valid"]


def test_categories_ordered_and_looked_up_by_slug():
    storage = SupabaseStorage(FakeClient())
    storage.create_category({"name": "B", "slug": "b", "display_order": 2})
    storage.create_category({"name": "A", "slug": "a", "display_order": 1})

    assert [category.slug for category in storage.list_categories()] == ["a", "b"]
    assert storage.get_category_by_slug("b").name == "B"
    assert storage.get_category_by_slug("missing") is None


def test_settings_upsert_and_users():
    storage = SupabaseStorage(FakeClient())
    storage.set_setting("logo", "/uploads/one.png")
    storage.set_setting("logo", "/uploads/two.png")
    user = storage.create_user("admin", "hash")

    assert [setting.value for setting in storage.list_settings()] == ["/uploads/two.png"]
    assert storage.get_user_by_username("admin") == user
    assert storage.update_user_password(user.id, "new-hash") is True
    assert storage.get_user(user.id).password_hash == "new-hash"


def test_client_failures_become_storage_errors():
    storage = SupabaseStorage(FakeClient(fail=True))

    with pytest.raises(StorageError, match="connection refused"):
        storage.list_locations()


def test_missing_client_is_rejected():
    with pytest.raises(StorageError):
        SupabaseStorage(None)
