import pytest
from httpx import AsyncClient

from config import ApplicationConfig
from tests.utils.api_client import sign_in, sign_up


@pytest.mark.asyncio
async def test_guest_pages_render_for_anonymous(client: AsyncClient):
    for path in ("/", "/sign-in", "/sign-up", "/forgot-password", "/verification"):
        response = await client.get(path)
        assert response.status_code == 200, path
        assert response.headers["content-type"].startswith("text/html")


@pytest.mark.asyncio
async def test_guest_pages_redirect_signed_in_user(client: AsyncClient):
    await sign_up(client)
    await sign_in(client, "member")

    response = await client.get("/sign-in")

    assert response.status_code == 303
    assert response.headers["location"] == "/"


@pytest.mark.asyncio
async def test_account_page_requires_session(client: AsyncClient):
    anonymous = await client.get("/account")
    assert anonymous.status_code == 303
    assert anonymous.headers["location"] == "/sign-in"

    await sign_up(client)
    await sign_in(client, "member")
    signed_in = await client.get("/account")
    assert signed_in.status_code == 200
    assert "member@exzly.dev" in signed_in.text


@pytest.mark.asyncio
async def test_reset_password_page_needs_verified_session(client: AsyncClient):
    response = await client.get("/reset-password")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/html")


@pytest.mark.asyncio
async def test_web_sign_out_destroys_session(client: AsyncClient):
    await sign_up(client)
    await sign_in(client, "member")

    response = await client.get("/sign-out")
    assert response.status_code == 303
    client.cookies.clear()

    assert (await client.get("/account")).status_code == 303


@pytest.mark.asyncio
async def test_admin_pages_redirect_anonymous_to_admin_sign_in(client: AsyncClient):
    response = await client.get("/admin/users")

    assert response.status_code == 303
    assert response.headers["location"] == "/admin/sign-in"


@pytest.mark.asyncio
async def test_admin_pages_send_members_to_web_root(client: AsyncClient):
    await sign_up(client)
    await sign_in(client, "member")

    dashboard = await client.get("/admin")
    sign_in_page = await client.get("/admin/sign-in")

    assert dashboard.status_code == 303
    assert dashboard.headers["location"] == "/"
    assert sign_in_page.status_code == 303
    assert sign_in_page.headers["location"] == "/"


@pytest.mark.asyncio
async def test_admin_dashboard_and_users(client: AsyncClient, admin_user):
    await sign_up(client)
    await sign_in(client, "admin")

    dashboard = await client.get("/admin")
    users = await client.get("/admin/users")
    sign_in_page = await client.get("/admin/sign-in")

    assert dashboard.status_code == 200
    assert "Active users: 2" in dashboard.text
    assert users.status_code == 200
    assert "member" in users.text
    assert sign_in_page.status_code == 303
    assert sign_in_page.headers["location"] == "/admin"


@pytest.mark.asyncio
async def test_admin_sign_out(client: AsyncClient, admin_user):
    await sign_in(client, "admin")

    response = await client.get("/admin/sign-out")

    assert response.status_code == 303
    assert response.headers["location"] == "/admin/sign-in"
    assert ApplicationConfig.SESSION_COOKIE_NAME not in client.cookies


@pytest.mark.asyncio
async def test_unknown_api_route_uses_error_envelope(client: AsyncClient):
    response = await client.get("/api/nope")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"
