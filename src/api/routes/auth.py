from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response, status
from pydantic import EmailStr, Field, field_validator

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.rate_limit import limiter
from src.api.utils.session_cookie import get_session_id, set_session_cookie
from src.app.services.mailer import IMailer
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    ForgotPasswordResponse,
    ForgotPasswordUseCase,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    ResetPasswordCommand,
    ResetPasswordUseCase,
    SignInUseCase,
    SignOutUseCase,
    SignUpCommand,
    SignUpUseCase,
    SuccessResponse,
    VerificationResponse,
    VerificationUseCase,
)
from src.app.use_cases.base_dto import CamelModel
from src.depends import get_mailer, get_unit_of_work
from src.domain import rules
from src.domain.entities import Gender

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignUpRequest(CamelModel):
    """
    Sign-up HTTP request payload

    Validates format; uniqueness is checked by the use case.
    """

    email: EmailStr = Field(..., description="User email address")
    username: str = Field(..., min_length=1, max_length=rules.USERNAME_MAX)
    password: str = Field(..., min_length=rules.PASSWORD_MIN, max_length=rules.PASSWORD_MAX)
    full_name: str = Field(..., min_length=rules.FULL_NAME_MIN, max_length=rules.FULL_NAME_MAX)
    gender: Optional[Gender] = None

    @field_validator("username")
    @classmethod
    def username_format(cls, value: str) -> str:
        if not rules.is_valid_username(value):
            raise ValueError(rules.USERNAME_FORMAT_MESSAGE)
        return value

    @field_validator("full_name")
    @classmethod
    def full_name_trimmed(cls, value: str) -> str:
        value = value.strip()
        if len(value) < rules.FULL_NAME_MIN:
            raise ValueError(f"Full name must be at least {rules.FULL_NAME_MIN} characters")
        return value


@router.post("/sign-up", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
@limiter.limit(ApplicationConfig.RATE_LIMIT_SIGN_UP)
async def sign_up(
    request: Request,  # required by @limiter.limit()
    payload: SignUpRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create an account and return a ledgered token pair.

    Raises:
        - 400 Bad Request: invalid format, email or username taken
        - 429 Too Many Requests
    """
    command = SignUpCommand(
        email=payload.email,
        username=payload.username,
        password=payload.password,
        full_name=payload.full_name,
        gender=payload.gender,
    )
    result = await SignUpUseCase(uow).execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class SignInRequest(CamelModel):
    identity: str = Field(..., min_length=1, description="Email or username")
    password: str = Field(..., min_length=1)


@router.post("/sign-in", status_code=status.HTTP_200_OK, response_model=AuthResponse)
@limiter.limit(ApplicationConfig.RATE_LIMIT_SIGN_IN)
async def sign_in(
    request: Request,
    payload: SignInRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Sign in by email or username.

    Also opens a server-side session and sets the session cookie, so the
    same credentials work for the web and admin pages.

    Raises:
        - 401 Unauthorized: Invalid credentials
    """
    result = await SignInUseCase(uow).execute(
        payload.identity, payload.password, session_id=get_session_id(request)
    )

    if result.is_err():
        raise_for_error(result.error)

    signed_in = result.value
    set_session_cookie(response, signed_in.session_id, ApplicationConfig.SESSION_EXPIRES_MINUTES)
    return signed_in.public()


class RefreshTokenRequest(CamelModel):
    refresh_token: str = Field(..., min_length=1)


def _bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token:
        return None
    return token


@router.post("/sign-out", status_code=status.HTTP_200_OK, response_model=SuccessResponse)
async def sign_out(
    payload: RefreshTokenRequest,
    authorization: Optional[str] = Header(default=None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Revoke the bearer access token and the given refresh token.

    Raises:
        - 400 Bad Request: refresh token unknown or already revoked
        - 401 Unauthorized: missing bearer token, or tokens of different users
    """
    result = await SignOutUseCase(uow).execute(_bearer(authorization), payload.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/refresh-token", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse
)
async def refresh_token(
    payload: RefreshTokenRequest, uow: UnitOfWork = Depends(get_unit_of_work)
):
    """
    Issue a new access token for a valid refresh token.

    Raises:
        - 400 Bad Request: refresh token unknown or revoked
    """
    result = await RefreshTokenUseCase(uow).execute(payload.refresh_token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class ForgotPasswordRequest(CamelModel):
    identity: str = Field(..., min_length=1, description="Email or username")


@router.post(
    "/forgot-password", status_code=status.HTTP_200_OK, response_model=ForgotPasswordResponse
)
@limiter.limit(ApplicationConfig.RATE_LIMIT_FORGOT_PASSWORD)
async def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: IMailer = Depends(get_mailer),
):
    """
    Email a verification code to the account owner.

    Raises:
        - 404 Not Found: no active user with that email or username
        - 500 Internal Server Error: email could not be sent
    """
    result = await ForgotPasswordUseCase(uow, mailer).execute(
        payload.identity, str(request.base_url)
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class VerificationRequest(CamelModel):
    code: str = Field(..., min_length=1, max_length=6)


@router.post("/verification", status_code=status.HTTP_200_OK, response_model=VerificationResponse)
@limiter.limit(ApplicationConfig.RATE_LIMIT_VERIFICATION)
async def verification(
    request: Request,
    payload: VerificationRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Redeem a verification code for a password-reset token.

    Raises:
        - 400 Bad Request: code unknown, used or expired
    """
    result = await VerificationUseCase(uow).execute(
        payload.code, session_id=get_session_id(request)
    )

    if result.is_err():
        raise_for_error(result.error)

    verified = result.value
    if verified.guest_session:
        set_session_cookie(
            response, verified.session_id, ApplicationConfig.PASSWORD_RESET_EXPIRES_MINUTES
        )
    return verified.public()


class ResetPasswordRequest(CamelModel):
    token: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=rules.PASSWORD_MIN, max_length=rules.PASSWORD_MAX)
    confirm_password: str = Field(..., min_length=1)


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=SuccessResponse)
async def reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Set a new password using a reset token.

    Raises:
        - 400 Bad Request: passwords differ, token unknown, used or expired
    """
    command = ResetPasswordCommand(
        token=payload.token,
        new_password=payload.new_password,
        confirm_password=payload.confirm_password,
    )
    result = await ResetPasswordUseCase(uow).execute(command, session_id=get_session_id(request))

    if result.is_err():
        raise_for_error(result.error)

    return result.value
