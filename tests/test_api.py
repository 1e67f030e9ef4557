from __future__ import annotations

import pytest

from amazons import session as session_module
from web import create_app


@pytest.fixture
def client():
    app = create_app({"BOARD_SIZE": 6, "DIFFICULTY": "easy", "AI_WAIT_TIMEOUT": 30})
    yield app.test_client()
    app.extensions["amazons_session"].close()


def test_new_game_returns_board(client):
    r = client.post("/api/new", json={"size": 6, "difficulty": "easy"})
    assert r.status_code == 200
    data = r.get_json()
    assert data["size"] == 6
    assert data["board"][5] == ".W..W."
    assert data["turn"] == "white"
    assert data["history"] == []
    assert data["ai_move"] is None


def test_human_move_gets_ai_reply(client):
    client.post("/api/new", json={"size": 6})
    r = client.post("/api/move", json={"move": {"from": [5, 1], "to": [3, 1], "arrow": [3, 3]}})
    assert r.status_code == 200
    data = r.get_json()
    assert data["ai_move"] and data["ai_move"]["player"] == "black"
    assert data["turn"] == "white"
    assert data["history"][0] == "Move 1: Queen (6,2) -> (4,2), Arrow -> (4,4)"
    assert len(data["history"]) == 2


def test_bad_moves_are_rejected(client):
    client.post("/api/new", json={"size": 6})
    assert client.post("/api/move", json={}).status_code == 400
    assert client.post("/api/move", json={"move": {"from": [5, 1]}}).status_code == 400
    r = client.post("/api/move", json={"move": {"from": [5, 1], "to": [2, 2], "arrow": [3, 3]}})
    assert r.status_code == 400
    assert "Illegal move" in r.get_json()["error"]
    assert client.get("/api/state").get_json()["history"] == []


def test_unsupported_board_size(client):
    r = client.post("/api/new", json={"size": 7})
    assert r.status_code == 400
    assert r.get_json()["code"] == "INVALID_CONFIGURATION"


def test_targets_for_highlighting(client):
    client.post("/api/new", json={"size": 6})
    r = client.get("/api/targets?row=5&col=1")
    assert [4, 1] in r.get_json()["targets"]
    r = client.get("/api/targets?row=5&col=1&to_row=3&to_col=1")
    assert [5, 1] in r.get_json()["targets"]
    assert client.get("/api/targets?row=x").status_code == 400


def test_ai_opens_when_white_is_ai(client):
    r = client.post("/api/new", json={"size": 6, "white": "ai", "black": "human"})
    data = r.get_json()
    assert data["ai_move"]["player"] == "white"
    assert data["turn"] == "black"


def test_cancel_without_search(client):
    r = client.post("/api/cancel")
    assert r.status_code == 200
    assert r.get_json()["canceled"] is False


def test_seat_switch_lets_the_ai_take_over(client):
    client.post("/api/new", json={"size": 6, "white": "human", "black": "human"})
    r = client.post("/api/seat", json={"player": "white", "type": "ai"})
    assert r.status_code == 200
    data = r.get_json()
    assert data["white"] == "ai"
    assert data["ai_move"]["player"] == "white"
    assert data["turn"] == "black"


def test_move_for_an_ai_seat_is_refused(client, monkeypatch):
    def broken(state, difficulty, cancel):
        raise RuntimeError("boom")

    monkeypatch.setattr(session_module, "get_best_move", broken)
    client.post("/api/new", json={"size": 6})
    r = client.post("/api/move", json={"move": {"from": [5, 1], "to": [3, 1], "arrow": [3, 3]}})
    assert r.get_json()["ai_error"] == "boom"

    r = client.post("/api/move", json={"move": {"from": [0, 1], "to": [2, 1], "arrow": [2, 2]}})
    assert r.status_code == 409
    assert len(client.get("/api/state").get_json()["history"]) == 1

    monkeypatch.undo()
    r = client.post("/api/seat", json={"player": "black", "type": "ai"})
    assert r.get_json()["ai_move"]["player"] == "black"
    assert r.get_json()["turn"] == "white"


def test_bad_seat_requests(client):
    assert client.post("/api/seat", json={"player": "red", "type": "ai"}).status_code == 400
    assert client.post("/api/seat", json={"player": "white"}).status_code == 400
    r = client.post("/api/seat", json={"player": "white", "type": "robot"})
    assert r.status_code == 400
    assert r.get_json()["code"] == "INVALID_CONFIGURATION"
