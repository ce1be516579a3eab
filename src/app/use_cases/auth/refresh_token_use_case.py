"""
Refresh Token Use Case

Exchanges a ledgered refresh token for a new access token.
"""

from src.api.utils.jwt import read_claims
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import UNAUTHORIZED
from src.domain.entities import TokenType
from src.domain.result import Error, Result, Return

from .dtos import RefreshTokenResponse
from .tokens import find_refresh_token, issue_token


class RefreshTokenUseCase:
    """
    Use case for refreshing access tokens.

    Business Rules:
    - Refresh token must be ledgered and not revoked
    - Subject comes from the token claims; the ledger entry vouches for it
    - Exactly one new access token is issued and ledgered
    - The refresh token itself is not rotated
    - The subject must still be an active user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> Result[RefreshTokenResponse]:
        """
        Execute refresh token use case.

        Args:
            refresh_token: The refresh token presented by the client

        Returns:
            Result with RefreshTokenResponse containing the new access token, or Error
        """
        async with self.uow:
            found = await find_refresh_token(self.uow, refresh_token)
            if found.is_err():
                return Return.err(found.error)

            claims = read_claims(refresh_token) or {}
            user_id = claims.get("userId")
            if not isinstance(user_id, int):
                return Return.err(Error(UNAUTHORIZED, "Invalid token"))

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(Error(UNAUTHORIZED, "Invalid token"))

            token = await issue_token(self.uow, TokenType.access_token, user.id)

            await self.uow.commit()

            return Return.ok(RefreshTokenResponse(token=token))
