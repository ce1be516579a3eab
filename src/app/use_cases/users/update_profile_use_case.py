from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.app.use_cases.errors import permission_denied, user_not_found
from src.domain.actor import Actor
from src.domain.base import utcnow
from src.domain.result import Result, Return
from src.domain.rules import can_act_on

from .dtos import UpdateProfileCommand


class UpdateProfileUseCase:
    """
    Update full name and gender.

    Business Rules:
    - Owner or admin only
    - Fields left out of the command are not touched
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: Actor, user_id: int, command: UpdateProfileCommand
    ) -> Result[UserInfo]:
        if not can_act_on(actor.id, actor.is_admin, user_id):
            return Return.err(permission_denied())

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(user_not_found())

            changes = command.model_dump(exclude_unset=True)
            if "full_name" in changes and command.full_name is not None:
                user.full_name = command.full_name
            if "gender" in changes:
                user.gender = command.gender
            user.updated_at = utcnow()

            user = await self.uow.users.update(user)
            await self.uow.commit()

            return Return.ok(UserInfo.from_entity(user))
