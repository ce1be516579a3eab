from typing import List, Optional, Tuple

from sqlalchemy import delete, func, or_
from sqlmodel import select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import AuthToken, AuthVerify, User, UserStatus, WebSession


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _status(trashed: bool) -> UserStatus:
        return UserStatus.trashed if trashed else UserStatus.active

    async def get_by_id(self, user_id: int, trashed: bool = False) -> Optional[User]:
        """Get an active user by ID, or a trashed one when trashed=True"""
        stmt = select(User).where(User.id == user_id, User.status == self._status(trashed))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_identity(self, identity: str) -> Optional[User]:
        """Get an active user whose email or username equals identity"""
        stmt = (
            select(User)
            .where(
                or_(User.email == identity, User.username == identity),
                User.status == UserStatus.active,
            )
            .order_by(User.id)
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get an active user by email address"""
        stmt = select(User).where(User.email == email, User.status == UserStatus.active)
        result = await self.session.exec(stmt)
        return result.first()

    async def get_by_username(self, username: str) -> Optional[User]:
        """Get an active user by username"""
        stmt = select(User).where(
            User.username == username, User.status == UserStatus.active
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def purge(self, user: User) -> None:
        """Erase a user row together with its verification rows"""
        await self.session.execute(delete(AuthVerify).where(AuthVerify.user_id == user.id))
        await self.session.execute(delete(WebSession).where(WebSession.user_id == user.id))
        # Ledger rows outlive the account
        await self.session.execute(
            update(AuthToken).where(AuthToken.user_id == user.id).values(user_id=None)
        )
        await self.session.delete(user)
        await self.session.flush()

    async def list(
        self, search: Optional[str], trashed: bool, limit: int, offset: int
    ) -> Tuple[List[User], int]:
        """Page of users plus the number of rows matching the filter"""
        conditions = [User.status == self._status(trashed)]
        if search:
            conditions.append(
                or_(
                    User.username == search.lower(),
                    User.full_name.contains(search),
                )
            )

        count_stmt = select(func.count()).select_from(User).where(*conditions)
        filtered = (await self.session.execute(count_stmt)).scalar_one()

        stmt = select(User).where(*conditions).order_by(User.id).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), filtered

    async def count(self, trashed: bool = False) -> int:
        """Number of active (or trashed) users"""
        stmt = select(func.count()).select_from(User).where(
            User.status == self._status(trashed)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()
