"""
Reset Password Use Case

Consumes a reset token and sets a new password.
"""

import logging
from typing import Optional

from src.app.services.password_hasher import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import (
    INVALID_RESET_TOKEN,
    field_error,
    validation_error,
)
from src.domain.base import utcnow
from src.domain.result import Error, Result, Return

from .dtos import ResetPasswordCommand, SuccessResponse
from .web_sessions import clear_password_reset

logger = logging.getLogger(__name__)

TOKEN_INVALID = "Invalid request. Please request a new one"
TOKEN_EXPIRED = "The request has expired. Please request a new one"


class ResetPasswordUseCase:
    """
    Use case for completing password recovery.

    Business Rules:
    - newPassword and confirmPassword must match
    - Token must belong to a redeemed code, be unused and unexpired
    - Token is consumed by a single conditional update
    - Session reset flag is cleared on success
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, command: ResetPasswordCommand, session_id: Optional[str] = None
    ) -> Result[SuccessResponse]:
        if command.new_password != command.confirm_password:
            return Return.err(
                validation_error(field_error("confirmPassword", "Passwords do not match"))
            )

        async with self.uow:
            verify = await self.uow.auth_verifies.get_by_token(command.token)
            if verify is None or not verify.code_is_used or verify.token_is_used:
                return Return.err(Error(INVALID_RESET_TOKEN, TOKEN_INVALID))

            now = utcnow()
            if verify.is_expired(now):
                return Return.err(Error(INVALID_RESET_TOKEN, TOKEN_EXPIRED))

            user = await self.uow.users.get_by_id(verify.user_id)
            if user is None:
                return Return.err(Error(INVALID_RESET_TOKEN, TOKEN_INVALID))

            if not await self.uow.auth_verifies.redeem_token(verify.id, now):
                return Return.err(Error(INVALID_RESET_TOKEN, TOKEN_INVALID))

            user.password_hash = hash_password(command.new_password)
            await self.uow.users.update(user)
            await clear_password_reset(self.uow, session_id)

            await self.uow.commit()

            logger.info("Password reset for user %s", user.id)

            return Return.ok(SuccessResponse())
