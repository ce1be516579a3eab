from typing import Optional

from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import field_error, validation_error
from src.domain.result import Result, Return


async def check_identity_available(
    uow: UnitOfWork,
    email: Optional[str],
    username: Optional[str],
    exclude_id: Optional[int] = None,
) -> Result[None]:
    """Email and username must not be held by another active user."""
    violations = []

    if email:
        holder = await uow.users.get_by_email(email)
        if holder is not None and holder.id != exclude_id:
            violations.append(field_error("email", "Email is already in use"))

    if username:
        holder = await uow.users.get_by_username(username)
        if holder is not None and holder.id != exclude_id:
            violations.append(field_error("username", "Username is already taken"))

    if violations:
        return Return.err(validation_error(*violations))
    return Return.ok(None)
