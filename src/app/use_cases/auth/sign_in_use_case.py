"""
Sign In Use Case

Authenticates by email or username and returns a fresh token pair.
"""

from typing import Optional

from src.app.services.password_hasher import burn_password_check, verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import UNAUTHORIZED
from src.domain.entities import TokenType
from src.domain.result import Error, Result, Return
from src.domain.rules import normalize_identity

from .dtos import SignInResult, UserInfo
from .tokens import issue_token
from .web_sessions import open_session


class SignInUseCase:
    """
    Use case for credential sign-in.

    Business Rules:
    - identity matches either email or username (case-folded)
    - Unknown identity and wrong password fail the same way
    - Every sign-in mints new tokens; earlier tokens stay valid
    - A server-side session is opened for cookie-based surfaces
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, identity: str, password: str, session_id: Optional[str] = None
    ) -> Result[SignInResult]:
        """
        Execute sign-in use case.

        Args:
            identity: Email or username
            password: Plain text password
            session_id: Session cookie already held by the caller, if any

        Returns:
            Result with user projection, tokens and new session ID, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_identity(normalize_identity(identity))

            if user is None:
                burn_password_check()
                return Return.err(Error(UNAUTHORIZED, "Invalid credentials"))

            if not verify_password(password, user.password_hash):
                return Return.err(Error(UNAUTHORIZED, "Invalid credentials"))

            web_session = await open_session(self.uow, user.id, previous_id=session_id)
            access_token = await issue_token(self.uow, TokenType.access_token, user.id)
            refresh_token = await issue_token(self.uow, TokenType.refresh_token, user.id)

            await self.uow.commit()

            return Return.ok(
                SignInResult(
                    user=UserInfo.from_entity(user),
                    access_token=access_token,
                    refresh_token=refresh_token,
                    session_id=web_session.id,
                )
            )
