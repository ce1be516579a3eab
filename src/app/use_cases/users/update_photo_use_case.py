"""
Update Photo Use Case

Replaces or removes a user's profile photo.
"""

from typing import Optional

from config import ApplicationConfig
from src.app.services.photo_storage import IPhotoStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.app.use_cases.errors import (
    field_error,
    permission_denied,
    user_not_found,
    validation_error,
)
from src.domain.actor import Actor
from src.domain.base import utcnow
from src.domain.result import Result, Return
from src.domain.rules import can_act_on


class UpdatePhotoUseCase:
    """
    Use case for the profile photo.

    Business Rules:
    - Owner or admin only
    - png, jpeg, heic or heif, at most PHOTO_MAX_SIZE_BYTES
    - Either a new photo or remove=True is required
    - The previous file is removed once the change is committed
    """

    def __init__(self, uow: UnitOfWork, photo_storage: IPhotoStorage):
        self.uow = uow
        self.photo_storage = photo_storage

    async def execute(
        self,
        actor: Actor,
        user_id: int,
        content_type: Optional[str] = None,
        data: Optional[bytes] = None,
        remove: bool = False,
    ) -> Result[UserInfo]:
        if not can_act_on(actor.id, actor.is_admin, user_id):
            return Return.err(permission_denied())

        if not remove:
            if data is None:
                return Return.err(
                    validation_error(field_error("photo", "Profile photo is required"))
                )
            if content_type not in ApplicationConfig.PHOTO_ALLOWED_MIME_TYPES:
                return Return.err(
                    validation_error(field_error("photo", "Unsupported image type"))
                )
            if len(data) > ApplicationConfig.PHOTO_MAX_SIZE_BYTES:
                return Return.err(
                    validation_error(field_error("photo", "Profile photo is too large"))
                )

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(user_not_found())

            previous = user.photo_profile
            user.photo_profile = (
                None if remove else await self.photo_storage.save(user.id, content_type, data)
            )
            user.updated_at = utcnow()

            user = await self.uow.users.update(user)
            await self.uow.commit()
            response = UserInfo.from_entity(user)

        if previous:
            await self.photo_storage.remove(previous)

        return Return.ok(response)
