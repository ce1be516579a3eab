"""
AuthVerify Entity

One-time recovery codes and the reset tokens minted from them.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from src.domain.base import utcnow

from .enums import VerifyPurpose


class AuthVerify(SQLModel, table=True):
    """
    AuthVerify entity - password recovery state machine.

    created -> code_used (token minted, expiry replaced) -> token_used

    Business Rules:
    - code is 6 digits and never all the same digit
    - sha1 of the code is the non-secret key used in emailed links
    - code_is_used and token_is_used only ever go from False to True
    - Rows are kept for audit; they go away only with their user
    """

    __tablename__ = "auth_verify"

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(
        sa_column=Column(
            Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
        )
    )
    code: str = Field(max_length=6, index=True)
    sha1: str = Field(max_length=40, index=True)
    token: Optional[str] = Field(default=None, sa_column=Column(Text, index=True))
    purpose: VerifyPurpose = Field(default=VerifyPurpose.password_reset)

    code_is_used: bool = Field(default=False)
    token_is_used: bool = Field(default=False)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_auth_verify_expires_at", "expires_at"),)

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now
