import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.auth_token_repository import AuthTokenRepository
from src.adapter.repositories.auth_verify_repository import AuthVerifyRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.repositories.web_session_repository import WebSessionRepository
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    """
    One AsyncSession shared by the account repositories.

    Leaving the block discards anything not committed, so a use case that
    returns an error after staging writes leaves no partial state behind.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        self.users = UserRepository(self.session)
        self.auth_tokens = AuthTokenRepository(self.session)
        self.auth_verifies = AuthVerifyRepository(self.session)
        self.web_sessions = WebSessionRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        if exc_type is not None:
            logger.warning("Rolling back after %s", exc_type.__name__)
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
