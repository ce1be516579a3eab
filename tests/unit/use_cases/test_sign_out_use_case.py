import pytest

from src.app.use_cases.auth import SignOutUseCase
from src.domain.entities import AuthToken, TokenType


def _entry(token_type, user_id=3, revoked=False):
    return AuthToken(id=1, type=token_type, token="t", user_id=user_id, is_revoked=revoked)


@pytest.mark.asyncio
async def test_sign_out_revokes_both_tokens(mock_uow):
    mock_uow.auth_tokens.get_by_token.return_value = _entry(TokenType.refresh_token)
    mock_uow.auth_tokens.get_active.return_value = _entry(TokenType.access_token)

    result = await SignOutUseCase(mock_uow).execute("access", "refresh")

    assert result.is_ok()
    assert result.value.success is True
    revoked = [call.args for call in mock_uow.auth_tokens.revoke.await_args_list]
    assert revoked == [
        ("access", TokenType.access_token),
        ("refresh", TokenType.refresh_token),
    ]
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_sign_out_checks_refresh_token_before_bearer(mock_uow):
    result = await SignOutUseCase(mock_uow).execute(None, "unknown")

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.details[0]["path"] == "refreshToken"
    assert result.error.details[0]["message"] == "Invalid token"


@pytest.mark.asyncio
async def test_sign_out_rejects_revoked_refresh_token(mock_uow):
    mock_uow.auth_tokens.get_by_token.return_value = _entry(TokenType.refresh_token, revoked=True)

    result = await SignOutUseCase(mock_uow).execute("access", "refresh")

    assert result.error.details[0]["message"] == "Token was revoked"
    mock_uow.auth_tokens.revoke.assert_not_awaited()


@pytest.mark.asyncio
async def test_sign_out_requires_bearer_token(mock_uow):
    mock_uow.auth_tokens.get_by_token.return_value = _entry(TokenType.refresh_token)

    result = await SignOutUseCase(mock_uow).execute(None, "refresh")

    assert result.error.code == "UNAUTHORIZED"
    mock_uow.auth_tokens.revoke.assert_not_awaited()


@pytest.mark.asyncio
async def test_sign_out_refuses_tokens_of_different_users(mock_uow):
    mock_uow.auth_tokens.get_by_token.return_value = _entry(TokenType.refresh_token, user_id=3)
    mock_uow.auth_tokens.get_active.return_value = _entry(TokenType.access_token, user_id=4)

    result = await SignOutUseCase(mock_uow).execute("access", "refresh")

    assert result.error.code == "UNAUTHORIZED"
    assert result.error.message == "Invalid token"
    mock_uow.auth_tokens.revoke.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()
