from datetime import datetime
from typing import Optional

from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.auth_verify_repository import IAuthVerifyRepository
from src.domain.entities import AuthVerify


class AuthVerifyRepository(IAuthVerifyRepository):
    """Verification ledger implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, auth_verify: AuthVerify) -> AuthVerify:
        """Record a new verification code"""
        self.session.add(auth_verify)
        await self.session.flush()
        await self.session.refresh(auth_verify)
        return auth_verify

    async def get_latest_by_code(self, code: str) -> Optional[AuthVerify]:
        """Most recent row issued with this code"""
        stmt = (
            select(AuthVerify)
            .where(AuthVerify.code == code)
            .order_by(AuthVerify.id.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_latest_by_sha1(self, sha1: str) -> Optional[AuthVerify]:
        """Most recent row whose code hashes to sha1"""
        stmt = (
            select(AuthVerify)
            .where(AuthVerify.sha1 == sha1)
            .order_by(AuthVerify.id.desc())
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_token(self, token: str) -> Optional[AuthVerify]:
        """Row holding the given reset token"""
        stmt = select(AuthVerify).where(AuthVerify.token == token).limit(1)
        result = await self.session.exec(stmt)
        return result.first()

    async def redeem_code(
        self, verify_id: int, token: str, expires_at: datetime, now: datetime
    ) -> bool:
        """Compare-and-set on code_is_used; True only for the winning caller"""
        stmt = (
            update(AuthVerify)
            .where(
                AuthVerify.id == verify_id,
                AuthVerify.code_is_used == False,  # noqa: E712
                AuthVerify.expires_at >= now,
            )
            .values(code_is_used=True, token=token, expires_at=expires_at)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def redeem_token(self, verify_id: int, now: datetime) -> bool:
        """Compare-and-set on token_is_used; True only for the winning caller"""
        stmt = (
            update(AuthVerify)
            .where(
                AuthVerify.id == verify_id,
                AuthVerify.code_is_used == True,  # noqa: E712
                AuthVerify.token_is_used == False,  # noqa: E712
                AuthVerify.expires_at >= now,
            )
            .values(token_is_used=True)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
