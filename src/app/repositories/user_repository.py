from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: int, trashed: bool = False) -> Optional[User]:
        """Get an active user by ID, or a trashed one when trashed=True"""
        pass

    @abstractmethod
    async def get_by_identity(self, identity: str) -> Optional[User]:
        """Get an active user whose email or username equals identity"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get an active user by email address"""
        pass

    @abstractmethod
    async def get_by_username(self, username: str) -> Optional[User]:
        """Get an active user by username"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def purge(self, user: User) -> None:
        """Erase a user row together with its verification rows"""
        pass

    @abstractmethod
    async def list(
        self, search: Optional[str], trashed: bool, limit: int, offset: int
    ) -> Tuple[List[User], int]:
        """Page of users plus the number of rows matching the filter"""
        pass

    @abstractmethod
    async def count(self, trashed: bool = False) -> int:
        """Number of active (or trashed) users"""
        pass
