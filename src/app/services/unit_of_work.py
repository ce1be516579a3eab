from abc import ABC, abstractmethod

from src.app.repositories.auth_token_repository import IAuthTokenRepository
from src.app.repositories.auth_verify_repository import IAuthVerifyRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.repositories.web_session_repository import IWebSessionRepository


class UnitOfWork(ABC):
    """
    Transaction boundary for account use cases.

    Repositories are bound on enter. Nothing is persisted until commit();
    the credential store, both ledgers and web sessions change together.
    """

    users: IUserRepository
    auth_tokens: IAuthTokenRepository
    auth_verifies: IAuthVerifyRepository
    web_sessions: IWebSessionRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc, tb):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
