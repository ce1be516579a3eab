import pytest
from httpx import AsyncClient

from tests.utils.api_client import PASSWORD, sign_up


async def _reset_token(client: AsyncClient, mailer) -> str:
    await sign_up(client)
    await client.post("/api/auth/forgot-password", json={"identity": "member"})
    response = await client.post("/api/auth/verification", json={"code": mailer.last_code})
    assert response.status_code == 200
    return response.json()["token"]


def _payload(token, new_password="brand-new-pass", confirm_password=None):
    return {
        "token": token,
        "newPassword": new_password,
        "confirmPassword": confirm_password or new_password,
    }


@pytest.mark.asyncio
async def test_reset_password_changes_password_once(client: AsyncClient, mailer):
    token = await _reset_token(client, mailer)

    response = await client.post("/api/auth/reset-password", json=_payload(token))
    assert response.status_code == 200

    old = await client.post("/api/auth/sign-in", json={"identity": "member", "password": PASSWORD})
    assert old.status_code == 401
    new = await client.post(
        "/api/auth/sign-in", json={"identity": "member", "password": "brand-new-pass"}
    )
    assert new.status_code == 200

    again = await client.post("/api/auth/reset-password", json=_payload(token, "another-pass"))
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "INVALID_RESET_TOKEN"


@pytest.mark.asyncio
async def test_reset_password_clears_session_flag(client: AsyncClient, mailer):
    token = await _reset_token(client, mailer)
    assert (await client.get("/reset-password")).status_code == 200

    await client.post("/api/auth/reset-password", json=_payload(token))

    assert (await client.get("/reset-password")).status_code == 404


@pytest.mark.asyncio
async def test_reset_password_mismatch(client: AsyncClient, mailer):
    token = await _reset_token(client, mailer)

    response = await client.post(
        "/api/auth/reset-password", json=_payload(token, confirm_password="something-else")
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"][0]["path"] == "confirmPassword"


@pytest.mark.asyncio
async def test_reset_password_unknown_token(client: AsyncClient):
    response = await client.post("/api/auth/reset-password", json=_payload("made-up"))

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Invalid request. Please request a new one"
