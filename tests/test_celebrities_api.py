"""Tests for the admin celebrity management endpoints."""

import uuid

import pytest

CELEBRITIES_URL = "/api/v1/admin/celebrities"


def celebrity_payload(**overrides):
    payload = {
        "name": "Noor Al-Rafidain",
        "image": "https://cdn.example.com/noor.jpg",
        "description": "Runs weekly river clean-ups along the Tigris.",
        "category": "influencer",
        "socialLinks": [{"platform": "tiktok", "url": "https://tiktok.com/@noor"}],
    }
    payload.update(overrides)
    return payload


class TestRoleGating:
    @pytest.mark.parametrize(
        "role, expected",
        [("super_admin", 200), ("admin", 200), ("moderator", 403)],
    )
    def test_list(self, client, session_headers, role, expected):
        response = client.get(CELEBRITIES_URL, headers=session_headers(role=role))
        assert response.status_code == expected

    @pytest.mark.parametrize(
        "role, expected",
        [("super_admin", 201), ("admin", 201), ("moderator", 403)],
    )
    def test_create(self, client, session_headers, role, expected):
        response = client.post(CELEBRITIES_URL, json=celebrity_payload(), headers=session_headers(role=role))
        assert response.status_code == expected

    @pytest.mark.parametrize(
        "role, expected",
        [("super_admin", 200), ("admin", 403), ("moderator", 403)],
    )
    def test_delete(self, client, session_headers, make_celebrity, role, expected):
        celebrity_id = make_celebrity()
        response = client.delete(
            CELEBRITIES_URL,
            params={"id": str(celebrity_id)},
            headers=session_headers(role=role),
        )
        assert response.status_code == expected

    def test_unauthenticated(self, client):
        assert client.get(CELEBRITIES_URL).status_code == 401
        assert client.post(CELEBRITIES_URL, json=celebrity_payload()).status_code == 401
        assert client.delete(CELEBRITIES_URL, params={"id": str(uuid.uuid4())}).status_code == 401

    def test_refresh_token_does_not_authorize(self, client, session_headers):
        headers = session_headers(role="super_admin", token_type="refresh", cookie="access_token")
        assert client.get(CELEBRITIES_URL, headers=headers).status_code == 401


class TestCrud:
    def test_create_and_read_back(self, client, session_headers):
        headers = session_headers()
        response = client.post(CELEBRITIES_URL, json=celebrity_payload(), headers=headers)
        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Noor Al-Rafidain"
        assert created["isActive"] is True
        assert created["socialLinks"] == [{"platform": "tiktok", "url": "https://tiktok.com/@noor"}]
        assert created["createdAt"]

        listing = client.get(CELEBRITIES_URL, headers=headers).json()
        assert [c["id"] for c in listing["data"]] == [created["id"]]

    def test_local_image_path_is_accepted(self, client, session_headers):
        response = client.post(
            CELEBRITIES_URL,
            json=celebrity_payload(image="/uploads/noor.jpg"),
            headers=session_headers(),
        )
        assert response.status_code == 201

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": "N"},
            {"image": "noor.jpg"},
            {"description": "short"},
            {"socialLinks": [{"platform": "myspace", "url": "https://myspace.com/noor"}]},
            {"socialLinks": [{"platform": "instagram", "url": "not a url"}]},
        ],
    )
    def test_create_rejects_bad_input(self, client, session_headers, overrides):
        response = client.post(CELEBRITIES_URL, json=celebrity_payload(**overrides), headers=session_headers())
        assert response.status_code == 400
        assert response.json()["errors"]

    def test_partial_update(self, client, session_headers, make_celebrity):
        celebrity_id = make_celebrity(name="Old Name")

        response = client.put(
            CELEBRITIES_URL,
            json={"id": str(celebrity_id), "name": "New Name", "isActive": False},
            headers=session_headers(),
        )
        assert response.status_code == 200
        updated = response.json()
        assert updated["name"] == "New Name"
        assert updated["isActive"] is False
        assert updated["category"] == "content_creator"

        # hidden from the public tally
        assert client.get("/api/v1/vote").json()["celebrities"] == []

    def test_update_unknown(self, client, session_headers):
        response = client.put(
            CELEBRITIES_URL,
            json={"id": str(uuid.uuid4()), "name": "Nobody"},
            headers=session_headers(),
        )
        assert response.status_code == 404

    def test_update_requires_id(self, client, session_headers):
        response = client.put(CELEBRITIES_URL, json={"name": "Nobody"}, headers=session_headers())
        assert response.status_code == 400

    def test_delete_takes_votes_with_it(self, client, session_headers, make_celebrity):
        celebrity_id = make_celebrity()
        vote = client.post(
            "/api/v1/vote",
            json={"celebrityId": str(celebrity_id), "fingerprint": "d" * 40},
        )
        assert vote.status_code == 201

        response = client.delete(
            CELEBRITIES_URL,
            params={"id": str(celebrity_id)},
            headers={**session_headers(role="super_admin"), "Accept-Language": "en"},
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Celebrity deleted"}

        tallies = client.get("/api/v1/vote").json()
        assert tallies == {"celebrities": [], "totalVotes": 0}

        # the device may vote again once its old vote is gone
        other = make_celebrity(name="Other")
        again = client.post("/api/v1/vote", json={"celebrityId": str(other), "fingerprint": "d" * 40})
        assert again.status_code == 201

    def test_delete_unknown(self, client, session_headers):
        response = client.delete(
            CELEBRITIES_URL,
            params={"id": str(uuid.uuid4())},
            headers=session_headers(role="super_admin"),
        )
        assert response.status_code == 404


class TestListing:
    def test_pagination(self, client, session_headers, make_celebrity):
        for i in range(5):
            make_celebrity(name=f"Entrant {i}")

        response = client.get(CELEBRITIES_URL, params={"page": 2, "limit": 2}, headers=session_headers())
        body = response.json()
        assert len(body["data"]) == 2
        assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "totalPages": 3}

    def test_page_size_is_capped(self, client, session_headers, make_celebrity):
        make_celebrity()
        response = client.get(CELEBRITIES_URL, params={"limit": 1000}, headers=session_headers())
        assert response.json()["pagination"]["limit"] == 100

    def test_search_by_name(self, client, session_headers, make_celebrity):
        make_celebrity(name="Zainab Ali")
        make_celebrity(name="Ahmed Kareem")
        make_celebrity(name="100% Real")

        headers = session_headers()
        names = [c["name"] for c in client.get(CELEBRITIES_URL, params={"search": "zain"}, headers=headers).json()["data"]]
        assert names == ["Zainab Ali"]

        # LIKE wildcards in the search term are matched literally
        names = [c["name"] for c in client.get(CELEBRITIES_URL, params={"search": "%"}, headers=headers).json()["data"]]
        assert names == ["100% Real"]

    def test_invalid_page(self, client, session_headers):
        response = client.get(CELEBRITIES_URL, params={"page": 0}, headers=session_headers())
        assert response.status_code == 400
