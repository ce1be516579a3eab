"""
User Entity

Represents an account on the public web, API and admin surfaces.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import Gender, UserStatus

# Allowed lifecycle moves: soft delete, restore, forced purge of a trashed row
_TRANSITIONS = {
    UserStatus.active: {UserStatus.trashed},
    UserStatus.trashed: {UserStatus.active, UserStatus.purged},
    UserStatus.purged: set(),
}


class InvalidTransition(Exception):
    def __init__(self, current: UserStatus, target: UserStatus):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move user from {current.value} to {target.value}")


class User(SQLModel, table=True):
    """
    User entity - one person, one account.

    Business Rules:
    - Email and username are stored lower-cased
    - Email and username are unique among active users (checked by use cases)
    - Password stored as bcrypt hash, never serialized
    - Deleting moves the row to trash; only a trashed row can be purged
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, max_length=255)
    username: str = Field(index=True, max_length=30)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    is_admin: bool = Field(default=False)
    gender: Optional[Gender] = Field(default=None)
    full_name: str = Field(max_length=255)
    photo_profile: Optional[str] = Field(default=None, max_length=255)

    status: UserStatus = Field(default=UserStatus.active)
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_user_status", "status"),
        {"sqlite_autoincrement": True},
    )

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.active

    def transition(self, target: UserStatus) -> None:
        """Move to ``target`` or raise InvalidTransition."""
        if target not in _TRANSITIONS[self.status]:
            raise InvalidTransition(self.status, target)

        self.status = target
        self.deleted_at = None if target == UserStatus.active else utcnow()
        self.updated_at = utcnow()
