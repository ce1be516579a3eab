"""
Authentication Use Cases

All authentication-related business logic.
"""

from .sign_up_use_case import SignUpUseCase
from .sign_in_use_case import SignInUseCase
from .sign_out_use_case import SignOutUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .verification_use_case import VerificationUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .session_use_cases import EndSessionUseCase, PendingResetUseCase
from .dtos import (
    SignUpCommand,
    ResetPasswordCommand,
    UserInfo,
    AuthResponse,
    SignInResult,
    SuccessResponse,
    RefreshTokenResponse,
    ForgotPasswordResponse,
    VerificationResponse,
    VerificationResult,
)

__all__ = [
    # Use Cases
    "SignUpUseCase",
    "SignInUseCase",
    "SignOutUseCase",
    "RefreshTokenUseCase",
    "ForgotPasswordUseCase",
    "VerificationUseCase",
    "ResetPasswordUseCase",
    "EndSessionUseCase",
    "PendingResetUseCase",
    # DTOs - Commands
    "SignUpCommand",
    "ResetPasswordCommand",
    # DTOs - Responses
    "AuthResponse",
    "SignInResult",
    "SuccessResponse",
    "RefreshTokenResponse",
    "ForgotPasswordResponse",
    "VerificationResponse",
    "VerificationResult",
    # DTOs - Nested Models
    "UserInfo",
]
