from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from roadside.api.deps import storage_dependency
from roadside.config import settings
from roadside.main import create_app
from roadside.persistence.filesystem import FileStorage
from roadside.persistence.memory import MemoryStorage
from roadside.services.seed import seed_defaults


@pytest.fixture
def storage() -> MemoryStorage:
    store = MemoryStorage()
    seed_defaults(store, include_samples=False)
    return store


@pytest.fixture
def uploads_root(tmp_path: Path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def api_client(storage: MemoryStorage, uploads_root: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    from roadside.api.routes import media as media_routes

    monkeypatch.setattr(media_routes, "FileStorage", lambda: FileStorage(root=uploads_root))

    app = create_app()
    app.dependency_overrides[storage_dependency] = lambda: storage
    return TestClient(app)


@pytest.fixture
def admin_client(api_client: TestClient) -> TestClient:
    response = api_client.post(
        "/api/auth/login",
        json={"username": settings.default_admin_username, "password": settings.default_admin_password},
    )
    assert response.status_code == 200
    return api_client
