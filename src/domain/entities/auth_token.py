"""
AuthToken Entity

Ledger of every issued bearer token.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import TokenType


class AuthToken(SQLModel, table=True):
    """
    AuthToken entity - one row per issued access or refresh token.

    Business Rules:
    - A token authenticates only if its row exists, is not revoked,
      and the token itself still verifies (signature + expiry)
    - Revocation is a flag flip; rows are never deleted
    - Expiry lives in the token, not here
    """

    __tablename__ = "auth_token"

    id: Optional[int] = Field(default=None, primary_key=True)

    type: TokenType
    token: str = Field(sa_column=Column(Text, nullable=False, index=True))
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)

    is_revoked: bool = Field(default=False)
    revoked_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_auth_token_revoked", "is_revoked"),)
