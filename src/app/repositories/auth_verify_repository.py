from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from src.domain.entities import AuthVerify


class IAuthVerifyRepository(ABC):
    """Verification ledger interface - application layer"""

    @abstractmethod
    async def create(self, auth_verify: AuthVerify) -> AuthVerify:
        """Record a new verification code"""
        pass

    @abstractmethod
    async def get_latest_by_code(self, code: str) -> Optional[AuthVerify]:
        """Most recent row issued with this code"""
        pass

    @abstractmethod
    async def get_latest_by_sha1(self, sha1: str) -> Optional[AuthVerify]:
        """Most recent row whose code hashes to sha1"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[AuthVerify]:
        """Row holding the given reset token"""
        pass

    @abstractmethod
    async def redeem_code(
        self, verify_id: int, token: str, expires_at: datetime, now: datetime
    ) -> bool:
        """
        Atomically mark the code used and attach the reset token.

        Returns True only for the single caller that flipped code_is_used.
        """
        pass

    @abstractmethod
    async def redeem_token(self, verify_id: int, now: datetime) -> bool:
        """
        Atomically mark the reset token used.

        Returns True only for the single caller that flipped token_is_used.
        """
        pass
