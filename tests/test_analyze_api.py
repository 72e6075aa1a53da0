from __future__ import annotations

from io import BytesIO

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image

import app.api.analyze as analyze_module
from app.core.settings import settings
from app.main import app
from app.vision.describer import ERROR_FALLBACK
from app.vision.google_vision import VisionClient, get_vision_client

URL = "/api/analyze-image"

VISION_OK = {
    "responses": [
        {
            "labelAnnotations": [{"description": "Cat", "score": 0.95}, {"description": "Whiskers", "score": 0.9}],
            "localizedObjectAnnotations": [{"name": "Cat"}],
        }
    ]
}


def _png_bytes() -> bytes:
    buf = BytesIO()
    Image.new("RGB", (8, 8), (255, 0, 0)).save(buf, format="PNG")
    return buf.getvalue()


def _use_vision(handler, api_key="test-key"):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_vision_client] = lambda: VisionClient(
        api_key=api_key, endpoint="https://vision.example.test/v1/images:annotate", http=http
    )


@pytest.fixture()
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def captured(monkeypatch):
    seen = []
    monkeypatch.setattr(analyze_module, "capture_exception", seen.append)
    return seen


def test_analyze_image_success(client):
    _use_vision(lambda request: httpx.Response(200, json=VISION_OK))
    r = client.post(URL, files={"image": ("cat.png", _png_bytes(), "image/png")})
    assert r.status_code == 200
    body = r.json()
    assert body["description"] == "The image shows Cat, Whiskers. The image contains a cat. "
    assert body["detailedAnalysis"] == VISION_OK["responses"][0]


def test_get_not_allowed(client):
    r = client.get(URL)
    assert r.status_code == 405
    assert r.json() == {"error": "Method not allowed"}


def test_missing_image_field(client):
    _use_vision(lambda request: httpx.Response(200, json=VISION_OK))
    r = client.post(URL, files={"other": ("cat.png", _png_bytes(), "image/png")})
    assert r.status_code == 400
    assert r.json() == {"error": "No image file provided"}


def test_oversized_image_rejected(client, monkeypatch):
    _use_vision(lambda request: httpx.Response(200, json=VISION_OK))
    monkeypatch.setattr(settings, "max_upload_bytes", 16)
    r = client.post(URL, files={"image": ("cat.png", _png_bytes(), "image/png")})
    assert r.status_code == 400
    assert r.json() == {"error": "Image exceeds the 16 byte limit"}


def test_size_label_for_default_limit():
    assert analyze_module._size_label(10 * 1024 * 1024) == "10 MB"
    assert analyze_module._size_label(1500) == "1500 byte"


def test_plain_form_field_is_not_an_image(client):
    _use_vision(lambda request: httpx.Response(200, json=VISION_OK))
    r = client.post(URL, data={"image": "not-a-file"})
    assert r.status_code == 400
    assert r.json() == {"error": "No image file provided"}


def test_non_image_rejected(client):
    _use_vision(lambda request: httpx.Response(200, json=VISION_OK))
    r = client.post(URL, files={"image": ("notes.txt", b"just some text", "text/plain")})
    assert r.status_code == 400
    assert r.json() == {"error": "Uploaded file is not a valid image"}


def test_missing_api_key_is_server_error(client, captured):
    _use_vision(lambda request: httpx.Response(200, json=VISION_OK), api_key=None)
    r = client.post(URL, files={"image": ("cat.png", _png_bytes(), "image/png")})
    assert r.status_code == 500
    assert r.json() == {"error": "Server configuration error"}
    assert captured == []


def test_upstream_error_is_reported(client, captured):
    _use_vision(lambda request: httpx.Response(400, json={"error": {"code": 400, "message": "bad"}}))
    r = client.post(URL, files={"image": ("cat.png", _png_bytes(), "image/png")})
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to analyze image"}
    assert len(captured) == 1


def test_malformed_annotations_fall_back_and_report(client, captured):
    _use_vision(lambda request: httpx.Response(200, json={"responses": [{"labelAnnotations": [{"score": 1}]}]}))
    r = client.post(URL, files={"image": ("cat.png", _png_bytes(), "image/png")})
    assert r.status_code == 200
    assert r.json()["description"] == ERROR_FALLBACK
    assert len(captured) == 1


def test_healthz_reports_config(client):
    r = client.get("/healthz")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert "LABEL_DETECTION" in body["config"]["vision_features"]
    assert set(body["env_keys_present"]) == {"VISION_API_KEY", "SENTRY_DSN"}
