from __future__ import annotations

from golfmaster.session.models import SessionMode


def _hole_payload(number: int, score: int = 4, gir: bool = False) -> dict:
    return {
        "holeNumber": number,
        "par": 4,
        "score": score,
        "putts": 2,
        "gir": gir,
        "strokes": [
            {"club": "Driver", "distance": 240},
            {"club": "8 Iron", "distance": 145},
            {"club": "Putter"},
            {"club": "Putter"},
        ][:score],
    }


def _play(client, holes: int) -> dict:
    body: dict = {}
    for number in range(1, holes + 1):
        client.post(
            "/api/session/commands",
            json={"type": "START_HOLE", "number": number, "par": 4},
        )
        resp = client.post("/api/session/finish-hole", json=_hole_payload(number))
        assert resp.status_code == 200
        body = resp.json()
    return body


def test_get_session_starts_on_equipment_screen(session_client):
    client, _service = session_client

    resp = client.get("/api/session")

    assert resp.status_code == 200
    body = resp.json()
    assert body["screen"] == "equipment_selection"
    assert body["state"]["mode"] == "EQUIPMENT_SETUP"
    assert body["state"]["activeHoleNumber"] == 1
    assert body["state"]["editingIndex"] is None


def test_commands_drive_the_session(session_client):
    client, service = session_client

    resp = client.post(
        "/api/session/commands",
        json={"type": "SET_BAG", "clubs": ["Driver", "PW", "Putter"]},
    )
    assert resp.json()["state"]["bag"] == ["Driver", "PW", "Putter"]

    client.post(
        "/api/session/commands", json={"type": "START_HOLE", "number": 1, "par": 3}
    )
    resp = client.post(
        "/api/session/commands",
        json={"type": "ADD_STROKE", "stroke": {"club": "PW", "distance": 110}},
    )

    body = resp.json()
    assert body["screen"] == "live_play"
    assert body["state"]["activeStrokes"] == [
        {"club": "PW", "distance": 110.0, "result": None}
    ]

    resp = client.post(
        "/api/session/commands",
        json={"type": "FINISH_NEW_HOLE", "record": _hole_payload(1, score=1)},
    )
    body = resp.json()
    assert body["screen"] == "hole_setup"
    assert body["state"]["completedHoles"][0]["holeNumber"] == 1
    assert service.state.active_hole_number == 2


def test_invalid_command_is_rejected(session_client):
    client, service = session_client
    before = service.state

    for payload in (
        {"type": "TELEPORT"},
        {"type": "START_HOLE", "number": 0, "par": 4},
        {"number": 1},
    ):
        resp = client.post("/api/session/commands", json=payload)
        assert resp.status_code == 422

    assert service.state is before


def test_out_of_range_command_returns_unchanged_state(session_client):
    client, service = session_client
    before = service.state

    resp = client.post(
        "/api/session/commands", json={"type": "DELETE_STROKE", "index": 3}
    )

    assert resp.status_code == 200
    assert service.state is before


def test_finish_hole_edits_existing_hole(session_client):
    client, service = session_client
    _play(client, 3)

    client.post("/api/session/commands", json={"type": "EDIT_HOLE", "index": 0})
    resp = client.post("/api/session/finish-hole", json=_hole_payload(1, score=3))

    body = resp.json()
    assert body["screen"] == "summary"
    assert len(body["state"]["completedHoles"]) == 3
    assert body["state"]["completedHoles"][0]["score"] == 3
    assert service.state.is_editing is False


def test_equipment_lists_catalog_and_bag(session_client):
    client, _service = session_client

    body = client.get("/api/session/equipment").json()

    assert "Driver" in body["catalog"]
    assert "LW" in body["catalog"]
    assert body["bag"][0] == "Driver"


def test_summary_clubs_and_export(session_client):
    client, _service = session_client
    _play(client, 2)

    summary = client.get("/api/session/summary").json()
    assert summary["totalScore"] == 8
    assert summary["toParDisplay"] == "E"
    assert summary["holesPlayed"] == 2
    assert summary["canResume"] is True

    clubs = client.get("/api/session/clubs").json()
    assert clubs["totalStrokes"] == 8
    assert clubs["clubs"][0] == {"club": "Putter", "count": 4}

    rows = client.get("/api/session/export").json()
    assert len(rows) == 8
    assert rows[0]["holeNumber"] == 1
    assert rows[0]["strokeNumber"] == 1
    assert rows[0]["club"] == "Driver"


def test_close_round_archives(session_client):
    client, service = session_client

    resp = client.post("/api/session/close", json={})
    assert resp.status_code == 409

    _play(client, 2)
    resp = client.post(
        "/api/session/close",
        json={"courseName": "Links", "playerName": "Alex", "date": "2024-07-04"},
    )

    assert resp.status_code == 200
    record = resp.json()
    assert record["courseName"] == "Links"
    assert record["totalScore"] == 8
    assert len(record["holes"]) == 2
    assert service.state.mode is SessionMode.EQUIPMENT_SETUP
    assert len(service.state.archive) == 1


def test_archive_endpoints(session_client):
    client, service = session_client
    _play(client, 1)
    first = client.post("/api/session/close", json={}).json()
    _play(client, 2)
    second = client.post(
        "/api/session/close", json={"course_name": "Dunes"}
    ).json()

    listing = client.get("/api/archive").json()
    assert [item["id"] for item in listing] == [first["id"], second["id"]]
    assert listing[0]["courseName"] == "Unknown Course"
    assert listing[1]["courseName"] == "Dunes"
    assert listing[1]["holesPlayed"] == 2

    assert client.get(f"/api/archive/{second['id']}").json()["id"] == second["id"]
    assert len(client.get(f"/api/archive/{second['id']}/export").json()) == 8
    assert client.get(f"/api/archive/{first['id']}/clubs").json()["totalStrokes"] == 4

    resp = client.delete(f"/api/archive/{first['id']}")
    assert resp.status_code == 200
    assert [r["id"] for r in resp.json()["state"]["archive"]] == [second["id"]]

    for path in (
        f"/api/archive/{first['id']}",
        f"/api/archive/{first['id']}/export",
        f"/api/archive/{first['id']}/clubs",
    ):
        assert client.get(path).status_code == 404
    assert client.delete(f"/api/archive/{first['id']}").status_code == 404

    resp = client.delete("/api/archive")
    assert resp.json()["state"]["archive"] == []
    assert service.state.archive == ()


def test_health_reports_session(session_client):
    client, _service = session_client
    _play(client, 1)

    body = client.get("/health").json()

    assert body["status"] == "ok"
    assert body["session"] == {
        "mode": "HOLE_SETUP",
        "holesCompleted": 1,
        "archivedRounds": 0,
    }


def test_metrics_exposes_command_counter(session_client):
    client, _service = session_client
    client.post(
        "/api/session/commands", json={"type": "START_HOLE", "number": 1, "par": 4}
    )

    resp = client.get("/metrics")

    assert resp.status_code == 200
    assert "session_commands_total" in resp.text
    assert "requests_total" in resp.text


def test_api_key_required_when_enabled(session_client, monkeypatch):
    client, _service = session_client
    monkeypatch.setenv("REQUIRE_API_KEY", "1")
    monkeypatch.setenv("API_KEY", "secret")

    assert client.get("/api/session").status_code == 401
    denied = client.get("/api/session", headers={"x-api-key": "nope"})
    assert denied.status_code == 401
    allowed = client.get("/api/session", headers={"x-api-key": "secret"})
    assert allowed.status_code == 200
    assert client.get("/api/archive?apiKey=secret").status_code == 200
