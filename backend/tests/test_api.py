import json

from guessbox.server import create_app


def test_index(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b"Guess in the Box" in res.data


def test_health(client):
    res = client.get("/api/health")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True, "rooms": 0}


def test_questions(client):
    res = client.get("/api/questions")
    assert res.status_code == 200
    keys = [q["key"] for q in res.get_json()["questions"]]
    assert keys[:3] == ["alive", "animal", "food"]


def test_room_not_found(client):
    res = client.get("/api/rooms/ABCD")
    assert res.status_code == 404
    assert res.get_json()["error"] == "room_not_found"


def test_room_state_does_not_leak_secret(client, sio_factory):
    a = sio_factory()
    b = sio_factory()
    a.emit("join_room", {"roomCode": "ABCD", "playerName": "Ann"})
    b.emit("join_room", {"roomCode": "ABCD", "playerName": "Bob"})

    res = client.get("/api/rooms/ABCD")
    assert res.status_code == 200
    state = res.get_json()
    assert state["code"] == "ABCD"
    assert state["state"] == "active"
    assert [p["name"] for p in state["players"]] == ["Ann", "Bob"]
    assert "secretObject" not in state


def test_catalog_path_replaces_default_catalog(tmp_path):
    path = tmp_path / "objects.json"
    path.write_text(json.dumps([{"name": "kite", "isOutdoor": True}]))

    class Config:
        TESTING = True
        TRUST_PROXY_HEADERS = False
        CATALOG_PATH = str(path)

    app, _ = create_app(Config)
    registry = app.extensions["guessbox"]
    assert [e.name for e in registry.catalog] == ["kite"]
