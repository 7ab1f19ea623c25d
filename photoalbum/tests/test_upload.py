from io import BytesIO
from pathlib import Path

from PIL import Image

from photoalbum.utils.config import settings


def _png_bytes(size=(8, 6)) -> bytes:
    buf = BytesIO()
    Image.new("RGB", size, (128, 128, 128)).save(buf, format="PNG")
    return buf.getvalue()


def test_upload_requires_file(client):
    r = client.post("/upload")
    assert r.status_code == 400
    assert r.json()["error"] == "No file provided"


def test_upload_stores_image(client):
    r = client.post("/upload", files={"file": ("Holiday.PNG", _png_bytes(), "image/png")})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["originalFilename"] == "Holiday.PNG"
    assert body["filename"].endswith(".png")
    assert body["filepath"] == f"/uploaded/{body['filename']}"
    assert (body["width"], body["height"]) == (8, 6)
    stored = Path(settings.UPLOAD_DIR) / body["filename"]
    assert stored.read_bytes() == _png_bytes()
    assert body["size"] == stored.stat().st_size


def test_upload_names_do_not_collide(client):
    names = {
        client.post("/upload", files={"file": ("a.png", _png_bytes(), "image/png")}).json()["filename"]
        for _ in range(3)
    }
    assert len(names) == 3


def test_upload_rejects_non_images(client):
    r = client.post("/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
    assert r.status_code == 415
    r = client.post("/upload", files={"file": ("fake.png", b"not really", "image/png")})
    assert r.status_code == 400


def test_upload_rejects_oversized(client, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 10)
    r = client.post("/upload", files={"file": ("a.png", _png_bytes(), "image/png")})
    assert r.status_code == 413
