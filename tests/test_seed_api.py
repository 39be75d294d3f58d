"""Tests for the bootstrap endpoints."""

from backend.app.api.v1.endpoints import seed as seed_endpoint

ADMIN_SEED_URL = "/api/v1/admin/seed"
VOTE_SEED_URL = "/api/v1/vote/seed"
SEED_HEADERS = {"X-Seed-Secret": "test-seed-secret"}


def super_admin(**overrides):
    payload = {"username": "Owner", "password": "Sup3r!Secret", "displayName": "Site Owner"}
    payload.update(overrides)
    return payload


def test_seed_requires_secret(client):
    assert client.post(ADMIN_SEED_URL, json=super_admin()).status_code == 403
    assert client.post(ADMIN_SEED_URL, json=super_admin(), headers={"X-Seed-Secret": "guess"}).status_code == 403
    assert client.post(VOTE_SEED_URL).status_code == 403


def test_seed_super_admin_then_log_in(client):
    response = client.post(ADMIN_SEED_URL, json=super_admin(), headers={**SEED_HEADERS, "Accept-Language": "en"})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Admin created"
    assert body["admin"]["username"] == "owner"
    assert body["admin"]["role"] == "super_admin"

    login = client.post("/api/v1/auth/login", json={"username": "owner", "password": "Sup3r!Secret"})
    assert login.status_code == 200
    assert login.json()["user"]["displayName"] == "Site Owner"


def test_seed_rejects_weak_password(client):
    response = client.post(ADMIN_SEED_URL, json=super_admin(password="alllowercase"), headers=SEED_HEADERS)
    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"uppercase", "digit", "special"}


def test_seed_rejects_duplicate_username(client):
    assert client.post(ADMIN_SEED_URL, json=super_admin(), headers=SEED_HEADERS).status_code == 201
    response = client.post(ADMIN_SEED_URL, json=super_admin(username="OWNER"), headers=SEED_HEADERS)
    assert response.status_code == 409


def test_seed_username_claimed_after_lookup_is_a_conflict(client, make_admin, get_admin, monkeypatch):
    async def not_found(db, username):
        return None

    make_admin(username="owner")
    # the lookup misses, so only the unique constraint sees the clash
    monkeypatch.setattr(seed_endpoint, "_find_admin", not_found)

    response = client.post(ADMIN_SEED_URL, json=super_admin(), headers={**SEED_HEADERS, "Accept-Language": "en"})
    assert response.status_code == 409
    assert response.json()["detail"]
    assert get_admin("owner").role == "admin"


def test_seed_sample_celebrities_once(client):
    response = client.post(VOTE_SEED_URL, headers=SEED_HEADERS)
    assert response.status_code == 200
    assert response.json() == {"count": 4}

    tallies = client.get("/api/v1/vote").json()
    assert len(tallies["celebrities"]) == 4
    assert tallies["totalVotes"] == 0

    assert client.post(VOTE_SEED_URL, headers=SEED_HEADERS).status_code == 400
