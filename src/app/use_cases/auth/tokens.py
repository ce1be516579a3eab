from src.api.utils.jwt import create_user_token
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import field_error, validation_error
from src.domain.entities import AuthToken, TokenType
from src.domain.result import Result, Return


async def issue_token(uow: UnitOfWork, token_type: TokenType, user_id: int) -> str:
    """Sign a new token and record it in the ledger (caller commits)."""
    token = create_user_token(token_type, user_id)
    await uow.auth_tokens.create(AuthToken(type=token_type, token=token, user_id=user_id))
    return token


async def find_refresh_token(uow: UnitOfWork, token: str) -> Result[AuthToken]:
    """
    Ledger precondition shared by refresh and sign-out.

    The token must be ledgered as a refresh token and not revoked.
    """
    entry = await uow.auth_tokens.get_by_token(token)

    if entry is None or entry.type != TokenType.refresh_token:
        return Return.err(validation_error(field_error("refreshToken", "Invalid token")))

    if entry.is_revoked:
        return Return.err(validation_error(field_error("refreshToken", "Token was revoked")))

    return Return.ok(entry)
