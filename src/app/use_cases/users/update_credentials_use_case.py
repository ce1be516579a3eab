"""
Update Credentials Use Case

Changes email, username and/or password of an account.
"""

import logging

from src.app.services.password_hasher import hash_password
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
from src.domain.rules import can_act_on, normalize_identity

from .checks import check_identity_available
from .dtos import UpdateCredentialsCommand

logger = logging.getLogger(__name__)


class UpdateCredentialsUseCase:
    """
    Use case for changing credentials.

    Business Rules:
    - Owner or admin only
    - New email/username unique among active users other than the target
    - A new password needs a matching confirmPassword
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, actor: Actor, user_id: int, command: UpdateCredentialsCommand
    ) -> Result[UserInfo]:
        if not can_act_on(actor.id, actor.is_admin, user_id):
            return Return.err(permission_denied())

        if command.new_password is not None and command.new_password != command.confirm_password:
            return Return.err(
                validation_error(field_error("confirmPassword", "Passwords do not match"))
            )

        email = normalize_identity(command.email) if command.email else None
        username = normalize_identity(command.username) if command.username else None

        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                return Return.err(user_not_found())

            available = await check_identity_available(
                self.uow, email, username, exclude_id=user.id
            )
            if available.is_err():
                return Return.err(available.error)

            if email:
                user.email = email
            if username:
                user.username = username
            if command.new_password is not None:
                user.password_hash = hash_password(command.new_password)
            user.updated_at = utcnow()

            user = await self.uow.users.update(user)
            await self.uow.commit()

            logger.info("Credentials updated for user %s by %s", user.id, actor.id)

            return Return.ok(UserInfo.from_entity(user))
