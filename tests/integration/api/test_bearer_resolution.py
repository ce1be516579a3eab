import pytest
from httpx import AsyncClient
from jose import jwt

from config import ApplicationConfig
from src.api.utils.jwt import create_user_token
from src.domain.entities import AuthToken, TokenType
from tests.utils.api_client import bearer, sign_up


@pytest.mark.asyncio
async def test_anonymous_request_to_protected_route(client: AsyncClient):
    response = await client.get("/api/users/profile")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_garbage_bearer_is_rejected(client: AsyncClient):
    response = await client.get("/api/users/profile", headers=bearer("garbage"))

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_non_bearer_scheme_is_rejected(client: AsyncClient):
    response = await client.get("/api/users/profile", headers={"Authorization": "Basic abc"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_expired_bearer_is_rejected(client: AsyncClient, monkeypatch):
    await sign_up(client)
    monkeypatch.setattr(ApplicationConfig, "ACCESS_TOKEN_EXPIRES_MINUTES", -1)
    expired = create_user_token(TokenType.access_token, 1)

    response = await client.get("/api/users/profile", headers=bearer(expired))

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Token expired"


@pytest.mark.asyncio
async def test_valid_signature_but_not_ledgered(client: AsyncClient):
    await sign_up(client)
    minted_elsewhere = create_user_token(TokenType.access_token, 1)

    response = await client.get("/api/users/profile", headers=bearer(minted_elsewhere))

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_refresh_token_is_not_accepted_as_bearer(client: AsyncClient):
    tokens = await sign_up(client)

    response = await client.get("/api/users/profile", headers=bearer(tokens["refreshToken"]))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_ledgered_token_with_tampered_signature_is_rejected(
    client: AsyncClient, db_session
):
    tokens = await sign_up(client)
    claims = jwt.get_unverified_claims(tokens["accessToken"])
    forged = jwt.encode(claims, "wrong-secret", algorithm="HS256")
    db_session.add(AuthToken(type=TokenType.access_token, token=forged, user_id=claims["userId"]))
    await db_session.commit()

    response = await client.get("/api/users/profile", headers=bearer(forged))

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_bad_bearer_is_ignored_on_public_routes(client: AsyncClient):
    response = await client.post(
        "/api/auth/sign-up",
        json={
            "email": "member@exzly.dev",
            "username": "member",
            "password": "secret123",
            "fullName": "Member One",
        },
        headers=bearer("garbage"),
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_session_cookie_authenticates_api_requests(client: AsyncClient):
    await sign_up(client)
    await client.post("/api/auth/sign-in", json={"identity": "member", "password": "secret123"})

    response = await client.get("/api/users/profile")

    assert response.status_code == 200
    assert response.json()["username"] == "member"


@pytest.mark.asyncio
async def test_session_of_trashed_user_is_dropped(client: AsyncClient):
    tokens = await sign_up(client)
    await client.post("/api/auth/sign-in", json={"identity": "member", "password": "secret123"})
    user_id = tokens["user"]["id"]

    deleted = await client.delete(f"/api/users/profile/{user_id}")
    assert deleted.status_code == 200

    response = await client.get("/api/users/profile")
    assert response.status_code == 401
