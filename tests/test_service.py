from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("httpx")

from fastapi.testclient import TestClient  # noqa: E402

from movie_recommender.service.app import app  # noqa: E402


@pytest.fixture()
def client(config_file: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("CONFIG_PATH", str(config_file))
    with TestClient(app) as c:
        yield c


def test_health(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "movies": 6, "users": 5, "attributes": 4}


def test_recommend_content(client: TestClient) -> None:
    resp = client.post("/recommend/content", json={"user": "Sofia", "top_n": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert body["recommended"] == "Grease"
    assert [r["movie"] for r in body["results"]] == ["Grease", "Inception"]


def test_predict_uses_default_k(client: TestClient) -> None:
    resp = client.post("/predict", json={"movie": "Grease", "user": "Sofia"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["k"] == 2
    assert 4.0 <= body["predicted_rating"] <= 5.0


def test_recommend_cf(client: TestClient) -> None:
    resp = client.post("/recommend/cf", json={"user": "Sofia", "k": 2})
    assert resp.status_code == 200
    assert resp.json()["recommended"] == "Grease"


def test_error_statuses(client: TestClient) -> None:
    assert client.post("/recommend/content", json={"user": "nobody"}).status_code == 404
    assert client.post("/predict", json={"movie": "Alien", "user": "Sofia"}).status_code == 404
    assert client.post("/recommend/cf", json={"user": "Critic"}).status_code == 409
    assert client.post("/recommend/cf", json={"user": "Sofia", "k": 0}).status_code == 422


def test_recommended_is_best_of_truncated_ranking(client: TestClient) -> None:
    body = client.post("/recommend/cf", json={"user": "Sofia", "k": 2, "top_n": 1}).json()
    assert body["recommended"] == "Grease"
    assert [r["movie"] for r in body["results"]] == ["Grease"]

    resp = client.post("/recommend/content", json={"user": "Critic"})
    assert resp.status_code == 409
