from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.app.use_cases.errors import VALIDATION_ERROR, user_not_found
from src.domain.entities import UserStatus
from src.domain.result import Error, Result, Return

from .checks import check_identity_available


class RestoreUserUseCase:
    """
    Use case for restoring a trashed user (admin only, guarded by the route).

    Business Rules:
    - Only a trashed row can be restored
    - Fails when its email or username now belongs to an active user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: int) -> Result[UserInfo]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id, trashed=True)
            if user is None:
                if await self.uow.users.get_by_id(user_id) is not None:
                    return Return.err(Error(VALIDATION_ERROR, "User is not in trash"))
                return Return.err(user_not_found())

            available = await check_identity_available(self.uow, user.email, user.username)
            if available.is_err():
                return Return.err(available.error)

            user.transition(UserStatus.active)
            user = await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(UserInfo.from_entity(user))
