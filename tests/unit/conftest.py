import pytest
from unittest.mock import AsyncMock, MagicMock

from config import ApplicationConfig
from src.domain.actor import Actor


@pytest.fixture(autouse=True)
def fast_hashing(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "BCRYPT_ROUNDS", 4)


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork; lookups find nothing unless a test says otherwise"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = AsyncMock()
    uow.users.get_by_id.return_value = None
    uow.users.get_by_identity.return_value = None
    uow.users.get_by_email.return_value = None
    uow.users.get_by_username.return_value = None
    uow.users.create.side_effect = _assign_id
    uow.users.update.side_effect = lambda user: user

    uow.auth_tokens = AsyncMock()
    uow.auth_tokens.get_by_token.return_value = None
    uow.auth_tokens.get_active.return_value = None
    uow.auth_tokens.create.side_effect = _assign_id

    uow.auth_verifies = AsyncMock()
    uow.auth_verifies.get_latest_by_code.return_value = None
    uow.auth_verifies.get_latest_by_sha1.return_value = None
    uow.auth_verifies.get_by_token.return_value = None
    uow.auth_verifies.redeem_code.return_value = True
    uow.auth_verifies.redeem_token.return_value = True

    uow.web_sessions = AsyncMock()
    uow.web_sessions.get_by_id.return_value = None
    uow.web_sessions.create.side_effect = lambda web_session: web_session
    uow.web_sessions.update.side_effect = lambda web_session: web_session
    uow.web_sessions.delete.return_value = True
    return uow


def _assign_id(entity):
    if entity.id is None:
        entity.id = 1
    return entity


@pytest.fixture
def member():
    return Actor(id=2, email="member@exzly.dev", username="member", is_admin=False)


@pytest.fixture
def admin():
    return Actor(id=1, email="admin@exzly.dev", username="admin", is_admin=True)
