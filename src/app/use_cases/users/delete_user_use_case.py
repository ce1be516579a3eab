"""
Delete User Use Case

Soft delete moves a user to trash; a second, explicit delete of a
trashed user purges the row.
"""

import logging
from typing import Optional

from src.app.services.photo_storage import IPhotoStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import SuccessResponse
from src.app.use_cases.errors import (
    VALIDATION_ERROR,
    permission_denied,
    user_not_found,
)
from src.domain.actor import Actor
from src.domain.entities import UserStatus
from src.domain.result import Error, Result, Return
from src.domain.rules import can_act_on

logger = logging.getLogger(__name__)


class DeleteUserUseCase:
    """
    Use case for deleting a user.

    Business Rules:
    - Owner or admin only
    - An admin cannot delete their own account
    - in_trash=False: active -> trashed (404 when no active row)
    - in_trash=True: trashed -> purged (404 when no trashed row)
    - Purge erases verification rows and sessions; token ledger rows remain
    """

    def __init__(self, uow: UnitOfWork, photo_storage: Optional[IPhotoStorage] = None):
        self.uow = uow
        self.photo_storage = photo_storage

    async def execute(
        self, actor: Actor, user_id: int, in_trash: bool = False
    ) -> Result[SuccessResponse]:
        if not can_act_on(actor.id, actor.is_admin, user_id):
            return Return.err(permission_denied())

        if actor.is_admin and actor.id == user_id:
            return Return.err(Error(VALIDATION_ERROR, "Unable to delete"))

        photo = None
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id, trashed=in_trash)
            if user is None:
                return Return.err(user_not_found())

            if in_trash:
                user.transition(UserStatus.purged)
                photo = user.photo_profile
                await self.uow.users.purge(user)
            else:
                user.transition(UserStatus.trashed)
                await self.uow.users.update(user)

            await self.uow.commit()

        logger.info("User %s %s by %s", user_id, "purged" if in_trash else "trashed", actor.id)

        if photo and self.photo_storage is not None:
            await self.photo_storage.remove(photo)

        return Return.ok(SuccessResponse())
