from datetime import timedelta

import bcrypt
import pytest

from src.app.use_cases.auth import ResetPasswordCommand, ResetPasswordUseCase
from src.domain.base import utcnow
from src.domain.entities import AuthVerify, User, WebSession


def _command(new_password="newsecret", confirm_password="newsecret"):
    return ResetPasswordCommand(
        token="reset-token", new_password=new_password, confirm_password=confirm_password
    )


def _verify(**overrides):
    values = {
        "id": 9,
        "user_id": 5,
        "code": "123456",
        "sha1": "x",
        "token": "reset-token",
        "code_is_used": True,
        "expires_at": utcnow() + timedelta(minutes=5),
    }
    values.update(overrides)
    return AuthVerify(**values)


def _user():
    return User(id=5, email="m@exzly.dev", username="m", password_hash="old", full_name="Mm")


@pytest.mark.asyncio
async def test_reset_password_sets_new_hash_and_clears_session(mock_uow):
    user = _user()
    mock_uow.auth_verifies.get_by_token.return_value = _verify()
    mock_uow.users.get_by_id.return_value = user
    web_session = WebSession(
        id="sid", reset_password="reset-token", expires_at=utcnow() + timedelta(minutes=5)
    )
    mock_uow.web_sessions.get_by_id.return_value = web_session

    result = await ResetPasswordUseCase(mock_uow).execute(_command(), session_id="sid")

    assert result.is_ok()
    assert bcrypt.checkpw(b"newsecret", user.password_hash.encode())
    mock_uow.auth_verifies.redeem_token.assert_awaited_once()
    assert web_session.reset_password is None
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_reset_password_requires_matching_confirmation(mock_uow):
    result = await ResetPasswordUseCase(mock_uow).execute(_command(confirm_password="other123"))

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.details[0]["path"] == "confirmPassword"
    mock_uow.auth_verifies.get_by_token.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "verify",
    [None, _verify(token_is_used=True), _verify(code_is_used=False)],
    ids=["unknown", "used", "code-not-redeemed"],
)
async def test_reset_password_rejects_unusable_token(mock_uow, verify):
    mock_uow.auth_verifies.get_by_token.return_value = verify

    result = await ResetPasswordUseCase(mock_uow).execute(_command())

    assert result.error.code == "INVALID_RESET_TOKEN"
    assert result.error.message == "Invalid request. Please request a new one"
    mock_uow.users.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_reset_password_rejects_expired_token(mock_uow):
    mock_uow.auth_verifies.get_by_token.return_value = _verify(
        expires_at=utcnow() - timedelta(seconds=1)
    )

    result = await ResetPasswordUseCase(mock_uow).execute(_command())

    assert result.error.code == "INVALID_RESET_TOKEN"
    assert "expired" in result.error.message


@pytest.mark.asyncio
async def test_reset_password_token_is_single_use_under_race(mock_uow):
    mock_uow.auth_verifies.get_by_token.return_value = _verify()
    mock_uow.users.get_by_id.return_value = _user()
    mock_uow.auth_verifies.redeem_token.return_value = False

    result = await ResetPasswordUseCase(mock_uow).execute(_command())

    assert result.error.code == "INVALID_RESET_TOKEN"
    mock_uow.users.update.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_reset_password_for_user_trashed_after_verification(mock_uow):
    mock_uow.auth_verifies.get_by_token.return_value = _verify()

    result = await ResetPasswordUseCase(mock_uow).execute(_command())

    assert result.error.code == "INVALID_RESET_TOKEN"
    assert result.error.message == "Invalid request. Please request a new one"
    mock_uow.auth_verifies.redeem_token.assert_not_awaited()
