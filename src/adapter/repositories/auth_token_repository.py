from typing import Optional

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.auth_token_repository import IAuthTokenRepository
from src.domain.base import utcnow
from src.domain.entities import AuthToken, TokenType


class AuthTokenRepository(IAuthTokenRepository):
    """Token ledger implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, auth_token: AuthToken) -> AuthToken:
        """Record a newly issued token"""
        self.session.add(auth_token)
        await self.session.flush()
        await self.session.refresh(auth_token)
        return auth_token

    async def get_by_token(self, token: str) -> Optional[AuthToken]:
        """Get the most recent ledger entry for a token string"""
        stmt = (
            select(AuthToken)
            .where(AuthToken.token == token)
            .order_by(AuthToken.id.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_active(self, token: str, token_type: TokenType) -> Optional[AuthToken]:
        """Get a non-revoked ledger entry of the given type"""
        stmt = (
            select(AuthToken)
            .where(
                AuthToken.token == token,
                AuthToken.type == token_type,
                AuthToken.is_revoked == False,  # noqa: E712
            )
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def revoke(self, token: str, token_type: TokenType) -> int:
        """Revoke matching non-revoked entries. Returns count of revoked rows."""
        stmt = (
            update(AuthToken)
            .where(
                AuthToken.token == token,
                AuthToken.type == token_type,
                AuthToken.is_revoked == False,  # noqa: E712
            )
            .values(is_revoked=True, revoked_at=utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
