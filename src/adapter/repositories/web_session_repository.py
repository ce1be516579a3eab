from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.web_session_repository import IWebSessionRepository
from src.domain.entities import WebSession


class WebSessionRepository(IWebSessionRepository):
    """Server-side session repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, session_id: str) -> Optional[WebSession]:
        """Get session by ID"""
        stmt = select(WebSession).where(WebSession.id == session_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, web_session: WebSession) -> WebSession:
        """Create a new session"""
        self.session.add(web_session)
        await self.session.flush()
        await self.session.refresh(web_session)
        return web_session

    async def update(self, web_session: WebSession) -> WebSession:
        """Update existing session"""
        self.session.add(web_session)
        await self.session.flush()
        await self.session.refresh(web_session)
        return web_session

    async def delete(self, session_id: str) -> bool:
        """Destroy a session. Returns True if it existed."""
        stmt = delete(WebSession).where(WebSession.id == session_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0
