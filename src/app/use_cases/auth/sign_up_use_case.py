from src.app.services.password_hasher import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import field_error, validation_error
from src.domain.entities import TokenType, User
from src.domain.result import Result, Return
from src.domain.rules import normalize_identity

from .dtos import AuthResponse, SignUpCommand, UserInfo
from .tokens import issue_token


class SignUpUseCase:
    """
    Sign Up Use Case

    Business Logic:
    1. Reject email and username already held by an active user
       (both checked, reported together)
    2. Hash password with bcrypt
    3. Create a non-admin User
    4. Issue and ledger an access token and a refresh token
    5. Commit once: no user without tokens, no tokens without user
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: SignUpCommand) -> Result[AuthResponse]:
        email = normalize_identity(command.email)
        username = normalize_identity(command.username)

        async with self.uow:
            violations = []
            if await self.uow.users.get_by_email(email):
                violations.append(field_error("email", "Email is already in use"))
            if await self.uow.users.get_by_username(username):
                violations.append(field_error("username", "Username is already taken"))
            if violations:
                return Return.err(validation_error(*violations))

            user = await self.uow.users.create(
                User(
                    email=email,
                    username=username,
                    password_hash=hash_password(command.password),
                    is_admin=False,
                    gender=command.gender,
                    full_name=command.full_name,
                )
            )

            access_token = await issue_token(self.uow, TokenType.access_token, user.id)
            refresh_token = await issue_token(self.uow, TokenType.refresh_token, user.id)

            await self.uow.commit()

            return Return.ok(
                AuthResponse(
                    user=UserInfo.from_entity(user),
                    access_token=access_token,
                    refresh_token=refresh_token,
                )
            )
