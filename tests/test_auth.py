from vidtube.core.security import create_refresh_token


async def test_register_and_login(client):
    payload = {
        "username": "NewUser",
        "email": "new@example.com",
        "full_name": " New User ",
        "password": "password123",
    }
    response = await client.post("/api/v1/auth/register", json=payload)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["user"]["username"] == "newuser"
    assert data["user"]["full_name"] == "New User"
    assert data["access_token"]
    assert data["token_type"] == "bearer"

    by_email = await client.post("/api/v1/auth/login", json={"email": "new@example.com", "password": "password123"})
    assert by_email.status_code == 200
    by_username = await client.post("/api/v1/auth/login", json={"username": "NEWUSER", "password": "password123"})
    assert by_username.status_code == 200

    token = by_username.json()["data"]["access_token"]
    me = await client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.json()["data"]["email"] == "new@example.com"


async def test_register_duplicate_conflicts(client, make_user):
    await make_user("taken", email="taken@example.com")
    base = {"full_name": "Someone", "password": "password123"}

    response = await client.post("/api/v1/auth/register", json=dict(base, username="fresh", email="taken@example.com"))
    assert response.status_code == 409
    response = await client.post("/api/v1/auth/register", json=dict(base, username="taken", email="fresh@example.com"))
    assert response.status_code == 409


async def test_register_validates_input(client):
    response = await client.post(
        "/api/v1/auth/register",
        json={"username": "ok_name", "email": "not-an-email", "full_name": "x", "password": "short"},
    )
    assert response.status_code == 400
    fields = {error["field"] for error in response.json()["errors"]}
    assert {"email", "password"} <= fields


async def test_login_with_wrong_password(client, make_user):
    await make_user("someone", password="password123")
    response = await client.post("/api/v1/auth/login", json={"username": "someone", "password": "wrong-password"})
    assert response.status_code == 401


async def test_login_needs_an_identifier(client):
    response = await client.post("/api/v1/auth/login", json={"password": "password123"})
    assert response.status_code == 400


async def test_refresh_issues_new_tokens(client, make_user):
    user = await make_user("someone")
    response = await client.post("/api/v1/auth/refresh", json={"refresh_token": create_refresh_token(user.id)})
    assert response.status_code == 200
    assert response.json()["data"]["user"]["id"] == str(user.id)


async def test_refresh_rejects_access_tokens(client, make_user, auth):
    user = await make_user("someone")
    access_token = auth(user)["Authorization"].removeprefix("Bearer ")
    response = await client.post("/api/v1/auth/refresh", json={"refresh_token": access_token})
    assert response.status_code == 401


async def test_invalid_bearer_token(client):
    response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401
