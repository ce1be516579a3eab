from abc import ABC, abstractmethod


class IPhotoStorage(ABC):
    """Profile photo storage - application layer"""

    @abstractmethod
    async def save(self, user_id: int, content_type: str, data: bytes) -> str:
        """Store a photo and return its public path"""
        pass

    @abstractmethod
    async def remove(self, path: str) -> None:
        """Delete a previously stored photo, ignoring missing files"""
        pass
