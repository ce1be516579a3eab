"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    Gender,
    TokenType,
    UserStatus,
    VerifyPurpose,
)

# Export all entities
from .user import InvalidTransition, User
from .auth_token import AuthToken
from .auth_verify import AuthVerify
from .web_session import WebSession

__all__ = [
    # Enums
    "Gender",
    "TokenType",
    "UserStatus",
    "VerifyPurpose",
    # Entities
    "User",
    "AuthToken",
    "AuthVerify",
    "WebSession",
    # Errors
    "InvalidTransition",
]
