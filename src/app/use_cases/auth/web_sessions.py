"""
Server-side session helpers used by the auth use cases.

Callers own the transaction: nothing here commits.
"""

import secrets
from datetime import timedelta
from typing import Optional

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import WebSession


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


async def open_session(
    uow: UnitOfWork, user_id: int, previous_id: Optional[str] = None
) -> WebSession:
    """Start a fresh session for a signed-in user, dropping the previous one."""
    if previous_id:
        await uow.web_sessions.delete(previous_id)

    return await uow.web_sessions.create(
        WebSession(
            id=new_session_id(),
            user_id=user_id,
            expires_at=utcnow() + timedelta(minutes=ApplicationConfig.SESSION_EXPIRES_MINUTES),
        )
    )


async def flag_password_reset(
    uow: UnitOfWork, reset_token: str, session_id: Optional[str] = None
) -> WebSession:
    """
    Attach a reset token to the caller's session, creating one if needed.

    A guest session lives only as long as the reset window. A signed-in
    session keeps its own lifetime; only the flag expires.
    """
    now = utcnow()
    reset_expires_at = now + timedelta(minutes=ApplicationConfig.PASSWORD_RESET_EXPIRES_MINUTES)
    web_session = await uow.web_sessions.get_by_id(session_id) if session_id else None

    if web_session is None or web_session.expires_at < now:
        return await uow.web_sessions.create(
            WebSession(
                id=new_session_id(),
                reset_password=reset_token,
                reset_expires_at=reset_expires_at,
                expires_at=reset_expires_at,
            )
        )

    web_session.reset_password = reset_token
    web_session.reset_expires_at = reset_expires_at
    if web_session.user_id is None:
        web_session.expires_at = reset_expires_at
    return await uow.web_sessions.update(web_session)


async def clear_password_reset(uow: UnitOfWork, session_id: Optional[str]) -> None:
    if not session_id:
        return

    web_session = await uow.web_sessions.get_by_id(session_id)
    if web_session is not None and web_session.reset_password:
        web_session.reset_password = None
        web_session.reset_expires_at = None
        await uow.web_sessions.update(web_session)


async def end_session(uow: UnitOfWork, session_id: Optional[str]) -> bool:
    if not session_id:
        return False
    return await uow.web_sessions.delete(session_id)
