def test_home_endpoint(client):
    response = client.get("/")

    assert response.status_code == 200
    payload = response.json()
    assert payload["message"] == "Calometer API running"
    assert payload["status"] == "success"
    assert payload["data"]["service"] == "calometer"


def test_protected_routes_require_token(client):
    response = client.get("/api/users/log/get")

    assert response.status_code in (401, 403)
