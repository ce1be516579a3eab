"""
Create User Use Case

Admin-side account creation. Unlike sign-up, no tokens are issued and
the admin flag may be set.
"""

import logging

from src.app.services.password_hasher import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth.dtos import UserInfo
from src.domain.entities import User
from src.domain.result import Result, Return
from src.domain.rules import normalize_identity

from .checks import check_identity_available
from .dtos import CreateUserCommand

logger = logging.getLogger(__name__)


class CreateUserUseCase:
    """
    Use case for creating a user from the admin API.

    Business Rules:
    - Email and username unique among active users
    - Password hashed with bcrypt
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: CreateUserCommand) -> Result[UserInfo]:
        email = normalize_identity(command.email)
        username = normalize_identity(command.username)

        async with self.uow:
            available = await check_identity_available(self.uow, email, username)
            if available.is_err():
                return Return.err(available.error)

            user = await self.uow.users.create(
                User(
                    email=email,
                    username=username,
                    password_hash=hash_password(command.password),
                    is_admin=command.is_admin,
                    gender=command.gender,
                    full_name=command.full_name,
                )
            )
            await self.uow.commit()

            logger.info("User %s created (admin=%s)", user.id, user.is_admin)

            return Return.ok(UserInfo.from_entity(user))
