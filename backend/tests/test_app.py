# tests/test_app.py
from __future__ import annotations

import logging

from fastapi.testclient import TestClient

import echobody.main as main_module
from echobody.db.planners import PlannerRepository


# ── lifecycle ────────────────────────────────────────────────────────
def test_startup_ensures_indexes_and_health_pings_db(app, db, monkeypatch):
    seen = []
    real = main_module.ensure_indexes

    async def recording(database):
        seen.append(database)
        await real(database)

    monkeypatch.setattr(main_module, "ensure_indexes", recording)

    with TestClient(app) as c:
        assert seen == [db]
        assert c.get("/health").json() == {"status": "ok", "db": "ok"}

    assert app.state.mongo is None


def test_health_without_db(settings, gateway):
    app = main_module.create_app(settings, gateway=gateway)
    # no `with`: startup (and the Mongo connection) never runs
    assert TestClient(app).get("/health").json() == {"status": "ok", "db": "skip"}


def test_import_has_no_log_dir_side_effect(tmp_path, monkeypatch, settings, gateway):
    monkeypatch.chdir(tmp_path)
    main_module.create_app(settings.model_copy(update={"LOG_DIR": "logs"}), gateway=gateway)
    assert not (tmp_path / "logs").exists()


# ── unexpected errors ────────────────────────────────────────────────
def test_unexpected_generation_error_is_json_500(app, gateway, caplog):
    gateway.error = RuntimeError("boom")
    c = TestClient(app, raise_server_exceptions=False)
    body = {"weight": 70, "gender": "male", "age": 30, "height": 175,
            "activity_level": "beginner", "goal": "flexibility"}

    with caplog.at_level(logging.ERROR):
        r = c.post("/generate-plan", json=body)

    assert r.status_code == 500
    assert r.json() == {"success": False, "message": "Internal server error"}
    assert any("/generate-plan" in rec.getMessage() and "boom" in rec.getMessage() for rec in caplog.records)


def test_unexpected_error_elsewhere_uses_error_body(app, monkeypatch):
    async def broken(self, owner_id, kind, limit):
        raise OverflowError("MongoDB can only handle up to 8-byte ints")

    monkeypatch.setattr(PlannerRepository, "list", broken)
    c = TestClient(app, raise_server_exceptions=False)
    r = c.get("/planners/u1/3")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}


# ── malformed bodies ─────────────────────────────────────────────────
def test_non_object_body_is_400_on_generation_routes(client, gateway):
    r = client.post("/generate-plan", json=[1, 2])
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Invalid request body"}
    assert gateway.prompts == []


def test_malformed_json_is_400_on_user_routes(client):
    r = client.post("/login", content=b"{not json", headers={"content-type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}

    r = client.post("/store-meal-planner", json="just a string")
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request body"}
