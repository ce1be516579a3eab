"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Field names are snake_case in Python and camelCase in JSON.
"""

from typing import Optional

from src.app.use_cases.base_dto import CamelModel
from src.domain.entities import Gender, User


# ============================================================================
# Commands
# ============================================================================


class SignUpCommand(CamelModel):
    """Validated sign-up intent"""

    email: str
    username: str
    password: str
    full_name: str
    gender: Optional[Gender] = None


class ResetPasswordCommand(CamelModel):
    """Validated reset-password intent"""

    token: str
    new_password: str
    confirm_password: str


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(CamelModel):
    """Public user projection: no password, no timestamps"""

    id: int
    email: str
    username: str
    is_admin: bool
    gender: Optional[Gender] = None
    full_name: str
    photo_profile: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserInfo":
        return cls(
            id=user.id,
            email=user.email,
            username=user.username,
            is_admin=user.is_admin,
            gender=user.gender,
            full_name=user.full_name,
            photo_profile=user.photo_profile,
        )


class AuthResponse(CamelModel):
    """Response for sign-up and sign-in"""

    user: UserInfo
    access_token: str
    refresh_token: str


class SignInResult(AuthResponse):
    """Sign-in outcome, including the server-side session to set as cookie"""

    session_id: str

    def public(self) -> AuthResponse:
        return AuthResponse(
            user=self.user, access_token=self.access_token, refresh_token=self.refresh_token
        )


class SuccessResponse(CamelModel):
    """Generic acknowledgement"""

    success: bool = True


class RefreshTokenResponse(CamelModel):
    """Response for refresh token use case"""

    token: str


class ForgotPasswordResponse(CamelModel):
    """Response for forgot-password: never the raw email"""

    email: str
    is_admin: bool


class VerificationResponse(CamelModel):
    """Response for code verification"""

    purpose: str
    token: str


class VerificationResult(VerificationResponse):
    """Verification outcome, including the session flagged for reset"""

    session_id: str
    guest_session: bool = True

    def public(self) -> VerificationResponse:
        return VerificationResponse(purpose=self.purpose, token=self.token)
