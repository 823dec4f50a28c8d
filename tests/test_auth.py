from calometer.models.user_session import UserSession


SIGNUP = {"name": "Alice", "username": "alice", "password": "s3cret-pass"}


def _login(client, password="s3cret-pass"):
    return client.post("/api/users/login", json={"username": "alice", "password": password})


def test_signup_creates_user(client):
    response = client.post("/api/users/signup", json=SIGNUP)

    assert response.status_code == 201
    assert response.json()["status"] == "success"
    assert response.json()["data"]["u_id"]


def test_signup_rejects_duplicate_username(client):
    client.post("/api/users/signup", json=SIGNUP)

    response = client.post("/api/users/signup", json=SIGNUP)

    assert response.status_code == 409


def test_signup_rejects_blank_name(client):
    response = client.post("/api/users/signup", json={**SIGNUP, "name": "  "})

    assert response.status_code == 422


def test_login_with_wrong_password(client):
    client.post("/api/users/signup", json=SIGNUP)

    response = _login(client, password="wrong")

    assert response.status_code == 401
    assert response.json()["message"] == "Username or password is incorrect."


def test_login_issues_token_and_cookie(client, db):
    client.post("/api/users/signup", json=SIGNUP)

    response = _login(client)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["token_type"] == "bearer"
    assert response.cookies.get("token") == data["access_token"]
    assert db.query(UserSession).filter(UserSession.is_active.is_(True)).count() == 1


def test_token_unlocks_protected_routes_until_logout(client):
    client.post("/api/users/signup", json=SIGNUP)
    token = _login(client).json()["data"]["access_token"]
    headers = {"Authorization": f"Bearer {token}"}

    response = client.get("/api/users/body_details/exists", headers=headers)
    assert response.status_code == 200
    assert response.json()["data"] == {"exists": False}

    assert client.post("/api/users/logout", headers=headers).status_code == 200

    response = client.get("/api/users/body_details/exists", headers=headers)
    assert response.status_code == 401


def test_garbage_token_is_rejected(client):
    response = client.get(
        "/api/users/net_caloric_balance/get",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
