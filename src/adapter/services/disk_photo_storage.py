import asyncio
import uuid
from pathlib import Path

from src.app.services.photo_storage import IPhotoStorage

EXTENSIONS = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/heic": ".heic",
    "image/heif": ".heif",
}


class DiskPhotoStorage(IPhotoStorage):
    """Stores photos under <root>/user-photos, served from /storage/user-photos"""

    def __init__(self, root: str, folder: str = "user-photos"):
        self.folder = folder
        self.directory = Path(root) / folder

    async def save(self, user_id: int, content_type: str, data: bytes) -> str:
        filename = f"{user_id}-{uuid.uuid4().hex}{EXTENSIONS.get(content_type, '')}"
        target = self.directory / filename
        await asyncio.to_thread(self._write, target, data)
        return f"/storage/{self.folder}/{filename}"

    async def remove(self, path: str) -> None:
        target = self.directory / Path(path).name
        await asyncio.to_thread(target.unlink, missing_ok=True)

    def _write(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
