"""Integration tests for registration and login."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from infrastructure.auth.jwt_provider import JWTAuthProvider
from tests.conftest import register_and_login


class TestRegister:
    """POST /api/users"""

    @pytest.mark.asyncio
    async def test_register(self, client: AsyncClient):
        """Test POST /api/users."""
        response = await client.post(
            "/api/users", json={"name": "Ann", "email": "a@x.com", "password": "secret1"}
        )

        assert response.status_code == 200
        assert response.json() == {"message": "User registered successfully"}

    @pytest.mark.asyncio
    async def test_duplicate_email_is_400(self, client: AsyncClient):
        """Test POST /api/users with an email already taken."""
        body = {"name": "Ann", "email": "a@x.com", "password": "secret1"}
        await client.post("/api/users", json=body)

        response = await client.post("/api/users", json=body)

        assert response.status_code == 400
        assert response.json() == {
            "error_code": "USER_ALREADY_EXISTS",
            "errors": [{"msg": "User already exists", "param": None}],
        }

    @pytest.mark.asyncio
    async def test_short_password_is_400(self, client: AsyncClient):
        """Test POST /api/users with a short password."""
        response = await client.post(
            "/api/users", json={"name": "Ann", "email": "a@x.com", "password": "12345"}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert [e["param"] for e in body["errors"]] == ["password"]

    @pytest.mark.asyncio
    async def test_lists_every_invalid_field(self, client: AsyncClient):
        """Test POST /api/users reports every invalid field."""
        response = await client.post(
            "/api/users", json={"name": "", "email": "not-an-email", "password": "1"}
        )

        assert response.status_code == 400
        params = {e["param"] for e in response.json()["errors"]}
        assert params == {"name", "email", "password"}

    @pytest.mark.asyncio
    async def test_email_is_stored_as_submitted(self, client: AsyncClient):
        """Test POST /api/users keeps the domain's case and matches it exactly."""
        first = await client.post(
            "/api/users", json={"name": "Ann", "email": "ann@X.com", "password": "secret1"}
        )
        second = await client.post(
            "/api/users", json={"name": "Ann", "email": "ann@x.com", "password": "secret1"}
        )

        assert first.status_code == 200
        assert second.status_code == 200

        login = await client.post(
            "/api/auth", json={"email": "ann@X.com", "password": "secret1"}
        )
        assert login.status_code == 200
        me = await client.get(
            "/api/auth", headers={"x-auth-token": login.json()["token"]}
        )
        assert me.json()["data"]["email"] == "ann@X.com"

    @pytest.mark.asyncio
    async def test_invalid_email_message(self, client: AsyncClient):
        """Test POST /api/users with a malformed email."""
        response = await client.post(
            "/api/users", json={"name": "Ann", "email": "ann@", "password": "secret1"}
        )

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"msg": "Please include a valid email", "param": "email"}
        ]


class TestLogin:
    """POST /api/auth and GET /api/auth"""

    @pytest.mark.asyncio
    async def test_login_returns_token(self, client: AsyncClient):
        """Test POST /api/auth."""
        headers = await register_and_login(client)

        assert headers["x-auth-token"].count(".") == 2

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, client: AsyncClient):
        """Test POST /api/auth with a wrong password."""
        await register_and_login(client)

        response = await client.post(
            "/api/auth", json={"email": "a@x.com", "password": "wrong-one"}
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_unknown_email_is_401(self, client: AsyncClient):
        """Test POST /api/auth with an unknown email."""
        response = await client.post(
            "/api/auth", json={"email": "nobody@x.com", "password": "secret1"}
        )

        assert response.status_code == 401
        assert response.json()["errors"][0]["msg"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_missing_fields_is_400(self, client: AsyncClient):
        """Test POST /api/auth without a password."""
        response = await client.post("/api/auth", json={"email": "a@x.com"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["param"] == "password"

    @pytest.mark.asyncio
    async def test_get_me_omits_password(self, client: AsyncClient):
        """Test GET /api/auth."""
        headers = await register_and_login(client)

        response = await client.get("/api/auth", headers=headers)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Ann"
        assert data["email"] == "a@x.com"
        assert data["avatar"].startswith("https://www.gravatar.com/avatar/")
        assert "password" not in data
        assert "password_hash" not in data

    @pytest.mark.asyncio
    async def test_get_me_without_token_is_401(self, client: AsyncClient):
        """Test GET /api/auth without a token."""
        response = await client.get("/api/auth")

        assert response.status_code == 401
        assert response.json()["errors"][0]["msg"] == "No token, authorization denied"

    @pytest.mark.asyncio
    async def test_get_me_with_bad_token_is_401(self, client: AsyncClient):
        """Test GET /api/auth with a malformed token."""
        response = await client.get("/api/auth", headers={"x-auth-token": "garbage"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "MALFORMED_TOKEN"

    @pytest.mark.asyncio
    async def test_token_signed_elsewhere_is_401(self, client: AsyncClient):
        """Test GET /api/auth with a token signed by another key."""
        foreign = JWTAuthProvider(secret_key="other-secret", algorithm="HS256", expire_seconds=60)

        response = await client.get(
            "/api/auth", headers={"x-auth-token": foreign.create_token(uuid4())}
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "INVALID_TOKEN"
