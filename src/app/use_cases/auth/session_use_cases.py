"""
Cookie session use cases for the page surfaces.
"""

from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import NOT_FOUND
from src.domain.base import utcnow
from src.domain.result import Error, Result, Return

from .dtos import SuccessResponse
from .web_sessions import end_session


class EndSessionUseCase:
    """Destroy the caller's server-side session, if any."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: Optional[str]) -> Result[SuccessResponse]:
        async with self.uow:
            if await end_session(self.uow, session_id):
                await self.uow.commit()
            return Return.ok(SuccessResponse())


class PendingResetUseCase:
    """
    Reset token carried by the caller's session.

    The reset-password page only exists for a session that went through
    verification and has not used or outlived its token.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, session_id: Optional[str]) -> Result[str]:
        if not session_id:
            return Return.err(Error(NOT_FOUND, "Page not found"))

        async with self.uow:
            web_session = await self.uow.web_sessions.get_by_id(session_id)
            now = utcnow()
            if (
                web_session is None
                or not web_session.reset_password
                or web_session.reset_expires_at is None
                or web_session.reset_expires_at < now
                or web_session.expires_at < now
            ):
                return Return.err(Error(NOT_FOUND, "Page not found"))

            return Return.ok(web_session.reset_password)
