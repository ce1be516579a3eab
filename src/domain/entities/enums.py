"""
Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class UserStatus(str, Enum):
    """User record lifecycle"""

    active = "active"
    trashed = "trashed"
    purged = "purged"


class Gender(str, Enum):
    """Optional user gender"""

    male = "male"
    female = "female"


class TokenType(str, Enum):
    """Kind of bearer token recorded in the token ledger"""

    access_token = "access-token"
    refresh_token = "refresh-token"


class VerifyPurpose(str, Enum):
    """What a one-time verification code unlocks"""

    password_reset = "password-reset"
