import pytest

from src.api.utils.jwt import create_user_token, verify_access_token
from src.app.use_cases.auth import RefreshTokenUseCase
from src.domain.entities import AuthToken, TokenType, User


@pytest.mark.asyncio
async def test_refresh_issues_one_access_token(mock_uow):
    refresh = create_user_token(TokenType.refresh_token, 3)
    mock_uow.auth_tokens.get_by_token.return_value = AuthToken(
        id=1, type=TokenType.refresh_token, token=refresh, user_id=3
    )
    mock_uow.users.get_by_id.return_value = User(
        id=3, email="m@exzly.dev", username="m", password_hash="x", full_name="Mm"
    )

    result = await RefreshTokenUseCase(mock_uow).execute(refresh)

    assert result.is_ok()
    assert verify_access_token(result.value.token).value == 3
    mock_uow.auth_tokens.create.assert_awaited_once()
    assert mock_uow.auth_tokens.create.call_args.args[0].type == TokenType.access_token
    mock_uow.auth_tokens.revoke.assert_not_awaited()


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(mock_uow):
    access = create_user_token(TokenType.access_token, 3)
    mock_uow.auth_tokens.get_by_token.return_value = AuthToken(
        id=1, type=TokenType.access_token, token=access, user_id=3
    )

    result = await RefreshTokenUseCase(mock_uow).execute(access)

    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.auth_tokens.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_refresh_rejects_revoked_token(mock_uow):
    mock_uow.auth_tokens.get_by_token.return_value = AuthToken(
        id=1, type=TokenType.refresh_token, token="r", user_id=3, is_revoked=True
    )

    result = await RefreshTokenUseCase(mock_uow).execute("r")

    assert result.error.details[0]["message"] == "Token was revoked"


@pytest.mark.asyncio
async def test_refresh_for_deleted_user_fails(mock_uow):
    refresh = create_user_token(TokenType.refresh_token, 3)
    mock_uow.auth_tokens.get_by_token.return_value = AuthToken(
        id=1, type=TokenType.refresh_token, token=refresh, user_id=3
    )

    result = await RefreshTokenUseCase(mock_uow).execute(refresh)

    assert result.error.code == "UNAUTHORIZED"
    mock_uow.commit.assert_not_awaited()
