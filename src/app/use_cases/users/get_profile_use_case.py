from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import user_not_found
from src.domain.actor import Actor
from src.domain.result import Result, Return
from src.domain.rules import can_act_on

from .dtos import UserProfile


class GetProfileUseCase:
    """Read a profile; the email is only shown to its owner or an admin."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, actor: Actor, user_id: int) -> Result[UserProfile]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(user_not_found())

            show_email = can_act_on(actor.id, actor.is_admin, user.id)
            return Return.ok(UserProfile.from_entity(user, show_email))
