import pytest
from fastapi.testclient import TestClient

from photoalbum.db import JsonFileStore, get_store
from photoalbum.main import app
from photoalbum.utils.config import settings


@pytest.fixture
def store(tmp_path):
    store = JsonFileStore(tmp_path / "db.json")
    store.initialize()
    return store


@pytest.fixture
def client(store, tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploaded"))
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def make_photo(client, user_id=1, **overrides):
    body = {
        "userId": user_id,
        "title": "Sunset",
        "filename": "sunset.jpg",
        "filepath": "/uploaded/sunset.jpg",
    }
    body.update(overrides)
    r = client.post("/photos", json=body)
    assert r.status_code == 201, r.text
    return r.json()
