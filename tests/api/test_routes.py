"""Tests for the HTTP layer (src/api/main.py and src/api/routes.py)"""

import logging
from typing import Generator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from src.api.main import app, unhandled_exception_handler
from src.core.config import API_PREFIX
from src.db.database import get_db

GAME_URL = f"{API_PREFIX}/game"


@pytest.fixture
def client(db_session_repo: Session) -> Generator[TestClient, None, None]:
    """App wired to the in-memory test database."""

    def _get_test_db() -> Generator[Session, None, None]:
        yield db_session_repo

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def create_game(client: TestClient, *names: str) -> dict:
    response = client.post(GAME_URL, json={"player_names": list(names)})
    assert response.status_code == 201
    return response.json()


def roll(client: TestClient, game_id: str, player_id: str, pins: int):
    return client.post(
        f"{GAME_URL}/{game_id}/roll", json={"player_id": player_id, "pins": pins}
    )


def test_healthz(client: TestClient) -> None:
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


# -- CREATE --
def test_create_game(client: TestClient) -> None:
    body = create_game(client, "The Dude", "Walter")

    assert body["is_finished"] is False
    assert [player["name"] for player in body["players"]] == ["The Dude", "Walter"]
    assert all(player["frames"] == [] for player in body["players"])
    assert all(player["total_score"] is None for player in body["players"])


def test_create_game_without_players(client: TestClient) -> None:
    response = client.post(GAME_URL, json={"player_names": []})

    assert response.status_code == 400
    assert response.headers["content-type"].startswith("application/problem+json")
    assert response.json()["code"] == "invalid_request"


# -- QUERY --
def test_get_game(client: TestClient) -> None:
    created = create_game(client, "Donny")
    response = client.get(f"{GAME_URL}/{created['game_id']}")

    assert response.status_code == 200
    assert response.json() == created


def test_get_unknown_game(client: TestClient) -> None:
    response = client.get(f"{GAME_URL}/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["code"] == "game_not_found"


# -- ROLL --
def test_roll_updates_scores(client: TestClient) -> None:
    created = create_game(client, "Bunny")
    game_id = created["game_id"]
    player_id = created["players"][0]["player_id"]

    for pins in [10, 3]:
        assert roll(client, game_id, player_id, pins).status_code == 200
    response = roll(client, game_id, player_id, 4)

    assert response.status_code == 200
    frames = response.json()["players"][0]["frames"]
    assert frames == [
        {"frame_number": 1, "roll1": 10, "roll2": None, "roll3": None, "score": 17},
        {"frame_number": 2, "roll1": 3, "roll2": 4, "roll3": None, "score": 24},
    ]
    # state is persisted
    stored = client.get(f"{GAME_URL}/{game_id}").json()
    assert stored["players"][0]["frames"] == frames
    assert stored["players"][0]["total_score"] == 24


def test_invalid_pin_count(client: TestClient) -> None:
    created = create_game(client, "Bunny")
    game_id = created["game_id"]
    player_id = created["players"][0]["player_id"]
    roll(client, game_id, player_id, 5)

    response = roll(client, game_id, player_id, 6)

    assert response.status_code == 400
    problem = response.json()
    assert problem["code"] == "invalid_pin_count"
    assert problem["max_allowed"] == 5
    # no state change
    stored = client.get(f"{GAME_URL}/{game_id}").json()
    assert stored["players"][0]["frames"][0]["roll2"] is None


def test_roll_for_unknown_player(client: TestClient) -> None:
    created = create_game(client, "Bunny")
    response = roll(client, created["game_id"], str(uuid4()), 3)

    assert response.status_code == 404
    assert response.json()["code"] == "player_not_found"


def test_roll_for_unknown_game(client: TestClient) -> None:
    response = roll(client, str(uuid4()), str(uuid4()), 3)
    assert response.status_code == 404
    assert response.json()["code"] == "game_not_found"


def test_perfect_game_and_roll_after_completion(client: TestClient) -> None:
    created = create_game(client, "Jesus")
    game_id = created["game_id"]
    player_id = created["players"][0]["player_id"]

    for _ in range(12):
        response = roll(client, game_id, player_id, 10)
        assert response.status_code == 200

    body = response.json()
    assert body["is_finished"] is True
    assert body["players"][0]["is_finished"] is True
    assert body["players"][0]["total_score"] == 300
    assert len(body["players"][0]["frames"]) == 10

    response = roll(client, game_id, player_id, 0)
    assert response.status_code == 400
    assert response.json()["code"] == "game_already_complete"


def test_unhandled_exception_logs_traceback(caplog: pytest.LogCaptureFixture) -> None:
    from fastapi import FastAPI

    test_app = FastAPI()
    test_app.add_exception_handler(Exception, unhandled_exception_handler)

    @test_app.get("/boom")
    def boom():
        raise ValueError("boom")

    test_client = TestClient(test_app, raise_server_exceptions=False)
    with caplog.at_level(logging.ERROR):
        response = test_client.get("/boom")

    assert response.status_code == 500
    assert response.json()["code"] == "internal_server_error"
    record = next((r for r in caplog.records if r.message == "Unhandled exception"), None)
    assert record is not None
    assert record.exc_info[0] is ValueError
