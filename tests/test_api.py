import pytest
from fastapi.testclient import TestClient

from app.main import create_app

HERO = {
    "hero_id": "h1",
    "name": "Aldric",
    "stats": {"prowess": 50, "charisma": 25, "vitality": 25},
    "greed": 50,
    "lifecycle_stage": "PRIME",
    "trust_level": 75,
    "traits": [],
}


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def registered(client):
    resp = client.post("/api/negotiation/heroes", json=HERO)
    assert resp.status_code == 200
    return client


def test_register_returns_hero_view(client):
    resp = client.post("/api/negotiation/heroes", json=HERO)

    assert resp.status_code == 200
    body = resp.json()
    assert body["expected_value"] == 360
    assert body["location"] == "POOL"
    assert body["state"]["phase"] == "UNINITIALIZED"


def test_duplicate_hero_conflicts(registered):
    resp = registered.post("/api/negotiation/heroes", json=HERO)

    assert resp.status_code == 409
    assert resp.json()["detail"]["code"] == "DUPLICATE_HERO"


def test_bad_lifecycle_stage_is_a_bad_request(client):
    resp = client.post("/api/negotiation/heroes", json={**HERO, "lifecycle_stage": "LEGEND"})

    assert resp.status_code == 400


def test_unknown_hero_is_not_found(client):
    resp = client.get("/api/negotiation/heroes/ghost")

    assert resp.status_code == 404
    assert resp.json()["detail"]["code"] == "HERO_NOT_FOUND"


def test_full_signing_flow(registered):
    resp = registered.post("/api/negotiation/start", json={"hero_id": "h1", "current_turn": 1})
    assert resp.status_code == 200
    assert resp.json()["turn_label"] == "Spring, Year 1"

    offer = {"signing_bonus": 40, "salary_per_turn": 40, "contract_length_years": 2}
    preview = registered.post("/api/negotiation/preview", json={"hero_id": "h1", "offer": offer}).json()
    assert preview["projected_tension"] == 0

    resp = registered.post("/api/negotiation/offer", json={"hero_id": "h1", "current_turn": 1, "offer": offer})
    assert resp.status_code == 200
    assert resp.json()["decision"]["verdict"] == "ACCEPT"

    resp = registered.post("/api/negotiation/accept", json={"hero_id": "h1", "current_turn": 1})
    assert resp.status_code == 200
    assert resp.json()["contract"]["turns_remaining"] == 8

    events = registered.get("/api/negotiation/events").json()
    assert [e["type"] for e in events["events"]] == ["NEGOTIATION_STARTED", "TENSION_CHANGED", "CONTRACT_SIGNED"]
    assert registered.get("/api/negotiation/events").json()["count"] == 0


def test_invalid_offer_is_a_bad_request(registered):
    registered.post("/api/negotiation/start", json={"hero_id": "h1", "current_turn": 1})

    resp = registered.post(
        "/api/negotiation/offer",
        json={"hero_id": "h1", "current_turn": 1, "offer": {"signing_bonus": -5, "salary_per_turn": 10}},
    )

    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "INVALID_OFFER"


def test_offer_before_start_conflicts(registered):
    resp = registered.post(
        "/api/negotiation/offer",
        json={"hero_id": "h1", "current_turn": 1, "offer": {"signing_bonus": 40, "salary_per_turn": 40}},
    )

    assert resp.status_code == 409
    assert resp.json()["detail"]["code"] == "NEGOTIATION_NOT_STARTED"


def test_refresh_only_runs_on_a_new_year(registered):
    body = registered.post("/api/negotiation/refresh", json={"current_turn": 2}).json()
    assert body["skipped"] is True

    body = registered.post("/api/negotiation/refresh", json={"current_turn": 5}).json()
    assert body["skipped"] is False
    assert body["released"] == []


def test_advance_turn(registered):
    resp = registered.post("/api/negotiation/advance-turn", json={"current_turn": 2})

    assert resp.status_code == 200
    assert resp.json()["expired"] == []


def test_oversized_signing_bonus_is_a_bad_request(registered):
    offer = {"signing_bonus": 10**400, "salary_per_turn": 40, "contract_length_years": 2}

    resp = registered.post("/api/negotiation/preview", json={"hero_id": "h1", "offer": offer})

    assert resp.status_code == 400
    assert resp.json()["detail"]["code"] == "INVALID_OFFER"


@pytest.mark.parametrize(
    "path, body",
    [
        ("/api/negotiation/start", {"hero_id": "h1", "current_turn": 0}),
        ("/api/negotiation/offer", {"hero_id": "h1", "current_turn": 0, "offer": {"signing_bonus": 40}}),
        ("/api/negotiation/accept", {"hero_id": "h1", "current_turn": 0}),
        ("/api/negotiation/refresh", {"current_turn": 0}),
        ("/api/negotiation/advance-turn", {"current_turn": 0}),
    ],
)
def test_turn_zero_is_rejected_on_every_route(registered, path, body):
    resp = registered.post(path, json=body)

    assert resp.status_code == 422
    assert registered.get("/api/negotiation/heroes/h1").json()["state"]["phase"] == "UNINITIALIZED"
