"""Tests for marathon registration and the admin participant list."""

REGISTER_URL = "/api/v1/register"
PARTICIPANTS_URL = "/api/v1/admin/participants"


def registration(**overrides):
    payload = {
        "name": "Ali Hassan",
        "phoneNumber": "+964 770 123 4567",
        "residence": "Karrada, Baghdad",
        "healthCondition": "Good",
        "sportLevel": "beginner",
    }
    payload.update(overrides)
    return payload


def test_register(client):
    response = client.post(REGISTER_URL, json=registration())
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Ali Hassan"
    assert body["id"]


def test_register_strips_markup(client):
    response = client.post(REGISTER_URL, json=registration(name="  <b>Ali</b> Hassan<script>x</script> "))
    assert response.status_code == 201
    assert response.json()["name"] == "Ali Hassanx"


def test_register_validation(client):
    assert client.post(REGISTER_URL, json=registration(phoneNumber="call me")).status_code == 400
    assert client.post(REGISTER_URL, json=registration(name="Al")).status_code == 400
    assert client.post(REGISTER_URL, json={}).status_code == 400


def test_register_rate_limit(client):
    for i in range(5):
        response = client.post(REGISTER_URL, json=registration(name=f"Runner {i}"))
        assert response.status_code == 201

    response = client.post(REGISTER_URL, json=registration(name="Runner 6"))
    assert response.status_code == 429
    assert "Retry-After" in response.headers

    other = client.post(REGISTER_URL, json=registration(), headers={"X-Forwarded-For": "8.8.8.8"})
    assert other.status_code == 201


def test_participant_list_requires_session(client):
    assert client.get(PARTICIPANTS_URL).status_code == 401


def test_participant_list(client, session_headers):
    client.post(REGISTER_URL, json=registration(name="Ali Hassan", phoneNumber="07701112222"))
    client.post(REGISTER_URL, json=registration(name="Sara Kareem", phoneNumber="07809998888"))

    headers = session_headers(role="moderator")
    body = client.get(PARTICIPANTS_URL, headers=headers).json()
    assert body["pagination"]["total"] == 2
    assert {p["name"] for p in body["data"]} == {"Ali Hassan", "Sara Kareem"}
    assert body["data"][0]["healthCondition"] == "Good"

    by_phone = client.get(PARTICIPANTS_URL, params={"search": "0780"}, headers=headers).json()
    assert [p["name"] for p in by_phone["data"]] == ["Sara Kareem"]

    by_name = client.get(PARTICIPANTS_URL, params={"search": "ali"}, headers=headers).json()
    assert [p["name"] for p in by_name["data"]] == ["Ali Hassan"]
