from unittest.mock import patch

import pytest

from src.app.services.password_hasher import hash_password
from src.app.use_cases.auth import SignInUseCase
from src.domain.entities import User


def _user():
    return User(
        id=3,
        email="member@exzly.dev",
        username="member",
        password_hash=hash_password("secret123"),
        full_name="Member One",
    )


@pytest.mark.asyncio
async def test_sign_in_issues_tokens_and_opens_session(mock_uow):
    mock_uow.users.get_by_identity.return_value = _user()

    result = await SignInUseCase(mock_uow).execute("  MEMBER ", "secret123")

    assert result.is_ok()
    mock_uow.users.get_by_identity.assert_awaited_once_with("member")
    signed_in = result.value
    assert signed_in.user.id == 3
    assert signed_in.session_id
    assert mock_uow.auth_tokens.create.await_count == 2
    mock_uow.web_sessions.create.assert_awaited_once()
    mock_uow.commit.assert_awaited_once()

    assert "sessionId" not in signed_in.public().model_dump(by_alias=True)


@pytest.mark.asyncio
async def test_sign_in_replaces_previous_session(mock_uow):
    mock_uow.users.get_by_identity.return_value = _user()

    result = await SignInUseCase(mock_uow).execute("member", "secret123", session_id="old")

    assert result.is_ok()
    mock_uow.web_sessions.delete.assert_awaited_once_with("old")
    assert result.value.session_id != "old"


@pytest.mark.asyncio
async def test_sign_in_wrong_password_and_unknown_user_fail_alike(mock_uow):
    mock_uow.users.get_by_identity.return_value = _user()
    wrong_password = await SignInUseCase(mock_uow).execute("member", "nope-nope")

    mock_uow.users.get_by_identity.return_value = None
    with patch(
        "src.app.use_cases.auth.sign_in_use_case.burn_password_check"
    ) as burn:
        unknown = await SignInUseCase(mock_uow).execute("ghost", "nope-nope")
        burn.assert_called_once()

    assert wrong_password.error == unknown.error
    assert unknown.error.code == "UNAUTHORIZED"
    assert unknown.error.message == "Invalid credentials"
    mock_uow.auth_tokens.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()
