"""Tests for API endpoints."""

from __future__ import annotations

import numpy as np
import pytest
from fastapi.testclient import TestClient

from imagetools.config import settings
from imagetools.image_io import decode_image_base64, encode_png_base64
from imagetools.main import app
from tests.conftest import horizontal_ramp, square_mask

client = TestClient(app)

RAMP_B64 = encode_png_base64(horizontal_ramp())
SHIFTED_B64 = encode_png_base64(horizontal_ramp(offset=55.0))
MIRRORED_B64 = encode_png_base64(np.fliplr(horizontal_ramp()))


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["operators_registered"] == 19


def test_operators_listing():
    response = client.get("/api/operators")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 19
    assert data[0]["category"] == "intensity"
    erode = next(op for op in data if op["id"] == "erode")
    assert erode["params"] == {"size": 3}


def test_signature():
    response = client.post("/api/signature", json={"image": RAMP_B64})
    assert response.status_code == 200
    data = response.json()
    assert len(data["signature"]) == 648
    assert set(data["signature"]) <= {-2, -1, 0, 1, 2}
    assert (data["width"], data["height"]) == (110, 110)


def test_signature_accepts_data_url():
    response = client.post("/api/signature", json={"image": "data:image/png;base64," + RAMP_B64})
    assert response.status_code == 200


def test_signature_bad_image():
    response = client.post("/api/signature", json={"image": "not an image"})
    assert response.status_code == 422


def test_signature_too_large(monkeypatch):
    monkeypatch.setattr(settings, "max_image_pixels", 100)
    response = client.post("/api/signature", json={"image": RAMP_B64})
    assert response.status_code == 413


def test_distance_from_images():
    response = client.post("/api/signature/distance", json={"image_a": RAMP_B64, "image_b": SHIFTED_B64})
    assert response.status_code == 200
    assert response.json()["distance"] == 0.0

    response = client.post("/api/signature/distance", json={"image_a": RAMP_B64, "image_b": MIRRORED_B64})
    assert response.json()["distance"] > 0.0


def test_distance_from_signatures():
    response = client.post("/api/signature/distance", json={"signature_a": [1, 0], "signature_b": [0, 1]})
    assert response.status_code == 200
    assert response.json()["distance"] == pytest.approx(np.sqrt(2) / 2, rel=1e-6)


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"image_a": RAMP_B64},
        {"image_a": RAMP_B64, "image_b": RAMP_B64, "signature_a": [1], "signature_b": [1]},
    ],
)
def test_distance_needs_exactly_one_pair(body):
    response = client.post("/api/signature/distance", json=body)
    assert response.status_code == 422


def test_process():
    image = encode_png_base64(square_mask() * 200.0)
    response = client.post(
        "/api/process",
        json={
            "image": image,
            "steps": [
                {"op": "normalise"},
                {"op": "erode", "params": {"size": 3}},
            ],
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["steps_completed"] == ["0:normalise", "1:erode"]
    assert data["errors"] == {}
    assert (data["width"], data["height"]) == (15, 15)
    result = decode_image_base64(data["image"])
    assert (result == 255.0).sum() == 25


def test_process_records_step_errors():
    response = client.post(
        "/api/process",
        json={"image": RAMP_B64, "steps": [{"op": "convolve", "params": {"kernel": "emboss"}}]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["steps_completed"] == []
    assert "0:convolve" in data["errors"]


def test_process_unknown_operator():
    response = client.post("/api/process", json={"image": RAMP_B64, "steps": [{"op": "sharpen"}]})
    assert response.status_code == 404
    assert "sharpen" in response.json()["detail"]


def test_process_rejects_oversized_kernel():
    response = client.post(
        "/api/process",
        json={"image": RAMP_B64, "steps": [{"op": "normalise"}, {"op": "erode", "params": {"size": 1500}}]},
    )
    assert response.status_code == 422
    assert response.json()["detail"].startswith("1:erode")


def test_process_accepts_kernel_at_limit(monkeypatch):
    monkeypatch.setattr(settings, "max_kernel_size", 5)
    image = encode_png_base64(square_mask())
    response = client.post(
        "/api/process",
        json={"image": image, "steps": [{"op": "gaussian_blur", "params": {"size": 5, "sigma": 1.0}}]},
    )
    assert response.status_code == 200
    assert response.json()["errors"] == {}


def test_process_bad_image():
    response = client.post("/api/process", json={"image": "not an image", "steps": [{"op": "normalise"}]})
    assert response.status_code == 422


def test_distance_bad_image():
    response = client.post("/api/signature/distance", json={"image_a": RAMP_B64, "image_b": "not an image"})
    assert response.status_code == 422
