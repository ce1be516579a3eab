"""
Verification Use Case

Redeems a one-time verification code for a password-reset token.
"""

from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from src.api.utils.jwt import create_password_reset_token
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import INVALID_CODE
from src.domain.base import utcnow
from src.domain.entities import AuthVerify, VerifyPurpose
from src.domain.result import Error, Result, Return

from .dtos import VerificationResult
from .web_sessions import flag_password_reset

CODE_INVALID = "Invalid code"
CODE_USED = "The verification code has already been used"
CODE_EXPIRED = "The verification code has expired. Please request a new one"


class VerificationUseCase:
    """
    Use case for redeeming a verification code.

    Business Rules:
    - Code must exist, be unused and unexpired
    - Redemption is a single conditional update: one winner under concurrency
    - The row's expiry is replaced by the reset-token lifetime
    - The caller's session is flagged with the reset token
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, code: str, session_id: Optional[str] = None
    ) -> Result[VerificationResult]:
        """Redeem a code typed by the user."""
        async with self.uow:
            verify = await self.uow.auth_verifies.get_latest_by_code(code)
            return await self._redeem(verify, session_id)

    async def execute_link(
        self, sha1: str, session_id: Optional[str] = None
    ) -> Result[VerificationResult]:
        """Redeem the code behind an emailed link."""
        async with self.uow:
            verify = await self.uow.auth_verifies.get_latest_by_sha1(sha1)
            return await self._redeem(verify, session_id)

    async def _redeem(
        self, verify: Optional[AuthVerify], session_id: Optional[str]
    ) -> Result[VerificationResult]:
        if verify is None or verify.purpose != VerifyPurpose.password_reset:
            return Return.err(Error(INVALID_CODE, CODE_INVALID))

        if verify.code_is_used:
            return Return.err(Error(INVALID_CODE, CODE_USED))

        now = utcnow()
        if verify.is_expired(now):
            return Return.err(Error(INVALID_CODE, CODE_EXPIRED))

        token = create_password_reset_token(verify.code)
        expires_at = now + timedelta(minutes=ApplicationConfig.PASSWORD_RESET_EXPIRES_MINUTES)

        redeemed = await self.uow.auth_verifies.redeem_code(verify.id, token, expires_at, now)
        if not redeemed:
            return Return.err(Error(INVALID_CODE, CODE_USED))

        web_session = await flag_password_reset(self.uow, token, session_id)

        await self.uow.commit()

        return Return.ok(
            VerificationResult(
                purpose=VerifyPurpose.password_reset.value,
                token=token,
                session_id=web_session.id,
                guest_session=web_session.user_id is None,
            )
        )
