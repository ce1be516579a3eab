"""
WebSession Entity

Server-side session data for the cookie-based surfaces.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow


class WebSession(SQLModel, table=True):
    """
    WebSession entity - resolved from an opaque cookie value.

    Business Rules:
    - id is random and carries no data
    - user_id is set on sign-in
    - reset_password holds the reset token after a code is verified
    - reset_expires_at bounds the reset flag, not the session
    - Expired sessions are ignored on read
    """

    __tablename__ = "web_sessions"

    id: str = Field(primary_key=True, max_length=64)

    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    reset_password: Optional[str] = Field(default=None, sa_column=Column(Text))
    reset_expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (Index("idx_web_session_expires_at", "expires_at"),)
