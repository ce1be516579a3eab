"""
Sign Out Use Case

Revokes an access/refresh token pair.
"""

import logging
from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import UNAUTHORIZED
from src.domain.entities import TokenType
from src.domain.result import Error, Result, Return

from .dtos import SuccessResponse
from .tokens import find_refresh_token

logger = logging.getLogger(__name__)


class SignOutUseCase:
    """
    Use case for signing out of the API.

    Business Rules:
    - refreshToken must be ledgered and not revoked (checked first)
    - A bearer access token is required
    - Both tokens must belong to the same user
    - Both ledger entries are flipped to revoked in one transaction
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, access_token: Optional[str], refresh_token: str
    ) -> Result[SuccessResponse]:
        async with self.uow:
            found = await find_refresh_token(self.uow, refresh_token)
            if found.is_err():
                return Return.err(found.error)

            if not access_token:
                return Return.err(Error(UNAUTHORIZED, "Unauthorized"))

            access_entry = await self.uow.auth_tokens.get_active(
                access_token, TokenType.access_token
            )
            if access_entry is None or access_entry.user_id != found.value.user_id:
                return Return.err(Error(UNAUTHORIZED, "Invalid token"))

            await self.uow.auth_tokens.revoke(access_token, TokenType.access_token)
            await self.uow.auth_tokens.revoke(refresh_token, TokenType.refresh_token)

            await self.uow.commit()

            logger.info("User %s signed out", access_entry.user_id)

            return Return.ok(SuccessResponse())
