from conftest import register

from healthtracker.utils.jwt_handler import create_access_token, verify_token


def login(client, email="tester@example.com", password="secret123"):
    return client.post("/auth/login", json={"email": email, "password": password})


def test_register_returns_token_and_public_user(client):
    body = register(client)
    assert body["success"] is True
    assert body["token_type"] == "bearer"
    assert body["data"]["username"] == "tester"
    assert "hashed_password" not in body["data"]
    assert verify_token(body["token"]) == str(body["data"]["id"])


def test_register_rejects_duplicate_email(client):
    register(client)
    response = client.post("/auth/register", json={"username": "other", "email": "Tester@example.com",
                                                   "password": "secret123"})
    assert response.status_code == 400
    assert response.json()["detail"] == "User with that email already exists"


def test_register_validates_input(client):
    response = client.post("/auth/register", json={"username": "x", "email": "bad", "password": "1"})
    assert response.status_code == 422


def test_login_and_me(client):
    register(client)
    response = login(client)
    assert response.status_code == 200
    token = response.json()["token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["email"] == "tester@example.com"
    assert me.json()["data"]["last_login"] is not None


def test_login_with_wrong_password_is_401(client):
    register(client)
    assert login(client, password="wrong-password").status_code == 401


def test_account_locks_after_five_failed_logins(client):
    register(client)
    for _ in range(5):
        assert login(client, password="wrong-password").status_code == 401

    response = login(client)
    assert response.status_code == 423
    assert response.json()["detail"].startswith("Account is temporarily locked")


def test_expired_token_is_reported_as_expired_session(client):
    user = register(client)["data"]
    token = create_access_token({"sub": str(user["id"])}, expires_minutes=-1)
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Session expired. Please log in again."


def test_garbage_token_is_rejected(client):
    response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Could not validate credentials."


def test_update_password_checks_current_password(auth_client):
    response = auth_client.put("/auth/updatepassword", json={"current_password": "nope", "new_password": "newsecret"})
    assert response.status_code == 401

    response = auth_client.put("/auth/updatepassword",
                               json={"current_password": "secret123", "new_password": "newsecret"})
    assert response.status_code == 200
    assert login(auth_client, password="newsecret").status_code == 200


def test_update_details_rejects_taken_username(auth_client):
    register(auth_client, username="someone", email="someone@example.com")
    response = auth_client.put("/auth/updatedetails", json={"username": "someone"})
    assert response.status_code == 400

    response = auth_client.put("/auth/updatedetails", json={"username": "renamed"})
    assert response.json()["data"]["username"] == "renamed"


def test_password_reset_flow(client):
    register(client)
    assert client.post("/auth/forgotpassword", json={"email": "missing@example.com"}).status_code == 404

    reset_token = client.post("/auth/forgotpassword", json={"email": "tester@example.com"}).json()["reset_token"]
    assert client.put("/auth/resetpassword/not-the-token", json={"password": "another1"}).status_code == 400

    response = client.put(f"/auth/resetpassword/{reset_token}", json={"password": "another1"})
    assert response.status_code == 200
    assert login(client, password="another1").status_code == 200
    # 토큰은 한 번만 사용
    assert client.put(f"/auth/resetpassword/{reset_token}", json={"password": "another2"}).status_code == 400
