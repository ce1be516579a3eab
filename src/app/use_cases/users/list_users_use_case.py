from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.domain.result import Result, Return

from .dtos import UserPage


class ListUsersUseCase:
    """
    Page through active or trashed users (admin only, guarded by the route).

    search matches a username exactly or a substring of the full name.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, search: Optional[str], trashed: bool, size: int, skip: int
    ) -> Result[UserPage]:
        async with self.uow:
            rows, filtered = await self.uow.users.list(search, trashed, size, skip)
            total = await self.uow.users.count(trashed)

            return Return.ok(
                UserPage(
                    data=[UserInfo.from_entity(user) for user in rows],
                    has_next=skip + len(rows) < filtered,
                    total=total,
                    filtered=filtered,
                )
            )
