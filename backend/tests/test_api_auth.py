"""
XYFORA Backend — Auth API Tests
================================

What:  /auth endpoints through the full middleware + handler stack.
How:   HTTPX AsyncClient over ASGITransport, temporary SQLite database.
"""

import pytest


class TestRegisterEndpoint:

    @pytest.mark.asyncio
    async def test_register_returns_user_and_token(self, test_client):
        response = await test_client.post(
            "/auth/register",
            json={"fullname": "A", "email": "a@x.com", "password": "p"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["fullname"] == "A"
        assert body["email"] == "a@x.com"
        assert len(body["id"]) == 24
        assert body["token"]
        assert "password" not in body

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, test_client, register):
        await register(email="a@x.com")

        response = await test_client.post(
            "/auth/register",
            json={"fullname": "B", "email": "a@x.com", "password": "q"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "conflict"
        assert response.json()["message"] == "User already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {"email": "a@x.com", "password": "p"},
        {"fullname": "A", "password": "p"},
        {"fullname": "A", "email": "a@x.com"},
        {"fullname": "   ", "email": "a@x.com", "password": "p"},
        {"fullname": "A", "email": "not-an-email", "password": "p"},
        {"fullname": "A", "email": "a@x.com", "password": ""},
    ])
    async def test_register_invalid_body(self, test_client, payload):
        response = await test_client.post("/auth/register", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["errors"]


class TestLoginEndpoint:

    @pytest.mark.asyncio
    async def test_login_success(self, test_client, register):
        registered = await register(email="a@x.com", password="p")

        response = await test_client.post("/auth/login", json={"email": "a@x.com", "password": "p"})

        assert response.status_code == 200
        assert response.json()["id"] == registered["id"]
        assert response.json()["token"]

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_client, register):
        await register(email="a@x.com", password="p")

        response = await test_client.post("/auth/login", json={"email": "a@x.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_login_unknown_email_same_message(self, test_client, register):
        await register(email="a@x.com", password="p")

        unknown = await test_client.post("/auth/login", json={"email": "z@x.com", "password": "p"})
        wrong = await test_client.post("/auth/login", json={"email": "a@x.com", "password": "x"})

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json()["message"] == wrong.json()["message"]


class TestMeEndpoint:

    @pytest.mark.asyncio
    async def test_me_with_token(self, test_client, register, auth_headers):
        user = await register(email="a@x.com", fullname="A")

        response = await test_client.get("/auth/me", headers=auth_headers(user["token"]))

        assert response.status_code == 200
        assert response.json() == {"id": user["id"], "fullname": "A", "email": "a@x.com"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("headers", [
        {},
        {"Authorization": "Bearer garbage"},
        {"Authorization": "Basic dXNlcjpwYXNz"},
    ])
    async def test_me_without_valid_token(self, test_client, headers):
        response = await test_client.get("/auth/me", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_me_with_padded_token(self, test_client, register):
        user = await register()

        response = await test_client.get(
            "/auth/me", headers={"Authorization": f"Bearer   {user['token']}  "}
        )

        assert response.status_code == 401
