"""
Token codec

Pure signing and verification of bearer tokens. Nothing here touches
the database: ledger membership is checked separately.
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from config import ApplicationConfig
from src.domain.entities import TokenType
from src.domain.result import Error, Result, Return

INVALID_TOKEN = "INVALID_TOKEN"
TOKEN_EXPIRED = "TOKEN_EXPIRED"


def _sign(claims: dict, expires_delta: timedelta) -> str:
    now = datetime.now(UTC)
    payload = {
        **claims,
        "jti": secrets.token_hex(8),
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def create_user_token(token_type: TokenType, user_id: int) -> str:
    """
    Create an access or refresh token for a user

    Args:
        token_type: access-token (short-lived) or refresh-token (long-lived)
        user_id: Subject user ID

    Returns:
        Signed JWT carrying {type, userId, jti, iat, exp}
    """
    if token_type == TokenType.refresh_token:
        expires = timedelta(days=ApplicationConfig.REFRESH_TOKEN_EXPIRES_DAYS)
    else:
        expires = timedelta(minutes=ApplicationConfig.ACCESS_TOKEN_EXPIRES_MINUTES)

    return _sign({"type": token_type.value, "userId": user_id}, expires)


def create_password_reset_token(code: str) -> str:
    """Create the one-time token that authorizes a password change."""
    return _sign(
        {"code": code},
        timedelta(minutes=ApplicationConfig.PASSWORD_RESET_EXPIRES_MINUTES),
    )


def decode_token(token: str) -> Result[dict]:
    """
    Verify signature and expiry

    Returns:
        Result with the claims, or Error(TOKEN_EXPIRED | INVALID_TOKEN)
    """
    try:
        payload = jwt.decode(
            token, ApplicationConfig.JWT_SECRET, algorithms=[ApplicationConfig.JWT_ALGORITHM]
        )
    except ExpiredSignatureError:
        return Return.err(Error(TOKEN_EXPIRED, "Token expired"))
    except JWTError:
        return Return.err(Error(INVALID_TOKEN, "Invalid token"))

    return Return.ok(payload)


def verify_access_token(token: str) -> Result[int]:
    """
    Verify a bearer access token without consulting the ledger

    Returns:
        Result with the subject user ID, or Error
    """
    decoded = decode_token(token)
    if decoded.is_err():
        return Return.err(decoded.error)

    payload = decoded.value
    user_id = payload.get("userId")
    if payload.get("type") != TokenType.access_token.value or not isinstance(user_id, int):
        return Return.err(Error(INVALID_TOKEN, "Invalid token"))

    return Return.ok(user_id)


def read_claims(token: str) -> Optional[dict]:
    """Claims of a token without checking signature or expiry."""
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return None
