from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import AuthToken, TokenType


class IAuthTokenRepository(ABC):
    """Token ledger interface - application layer"""

    @abstractmethod
    async def create(self, auth_token: AuthToken) -> AuthToken:
        """Record a newly issued token"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[AuthToken]:
        """Get the most recent ledger entry for a token string"""
        pass

    @abstractmethod
    async def get_active(self, token: str, token_type: TokenType) -> Optional[AuthToken]:
        """Get a non-revoked ledger entry of the given type"""
        pass

    @abstractmethod
    async def revoke(self, token: str, token_type: TokenType) -> int:
        """Revoke matching non-revoked entries. Returns count of revoked rows."""
        pass
