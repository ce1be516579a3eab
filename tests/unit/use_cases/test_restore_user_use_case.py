import pytest

from src.app.use_cases.users import RestoreUserUseCase
from src.domain.entities import User, UserStatus


def _user(user_id=2, status=UserStatus.trashed):
    return User(
        id=user_id,
        email="member@exzly.dev",
        username="member",
        password_hash="x",
        full_name="Member One",
        status=status,
    )


@pytest.mark.asyncio
async def test_restore_trashed_user(mock_uow):
    user = _user()
    mock_uow.users.get_by_id.side_effect = lambda user_id, trashed=False: user if trashed else None

    result = await RestoreUserUseCase(mock_uow).execute(2)

    assert result.is_ok()
    assert user.status == UserStatus.active
    assert user.deleted_at is None
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_restore_active_user_is_rejected(mock_uow):
    active = _user(status=UserStatus.active)
    mock_uow.users.get_by_id.side_effect = lambda user_id, trashed=False: None if trashed else active

    result = await RestoreUserUseCase(mock_uow).execute(2)

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.message == "User is not in trash"


@pytest.mark.asyncio
async def test_restore_fails_when_identity_was_taken(mock_uow):
    user = _user()
    mock_uow.users.get_by_id.side_effect = lambda user_id, trashed=False: user if trashed else None
    mock_uow.users.get_by_email.return_value = _user(user_id=8, status=UserStatus.active)

    result = await RestoreUserUseCase(mock_uow).execute(2)

    assert result.error.code == "VALIDATION_ERROR"
    assert result.error.details[0]["path"] == "email"
    assert user.status == UserStatus.trashed


@pytest.mark.asyncio
async def test_restore_unknown_user(mock_uow):
    result = await RestoreUserUseCase(mock_uow).execute(404)

    assert result.error.code == "NOT_FOUND"
