from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import WebSession


class IWebSessionRepository(ABC):
    """Server-side session repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, session_id: str) -> Optional[WebSession]:
        """Get session by ID"""
        pass

    @abstractmethod
    async def create(self, web_session: WebSession) -> WebSession:
        """Create a new session"""
        pass

    @abstractmethod
    async def update(self, web_session: WebSession) -> WebSession:
        """Update existing session"""
        pass

    @abstractmethod
    async def delete(self, session_id: str) -> bool:
        """Destroy a session. Returns True if it existed."""
        pass
