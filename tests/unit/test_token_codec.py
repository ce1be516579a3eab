from datetime import timedelta

from jose import jwt

from config import ApplicationConfig
from src.api.utils import jwt as codec
from src.domain.entities import TokenType


def test_access_token_carries_user_and_type():
    token = codec.create_user_token(TokenType.access_token, 42)

    claims = codec.decode_token(token).value
    assert claims["type"] == "access-token"
    assert claims["userId"] == 42
    assert claims["exp"] - claims["iat"] == ApplicationConfig.ACCESS_TOKEN_EXPIRES_MINUTES * 60


def test_tokens_minted_together_differ():
    first = codec.create_user_token(TokenType.access_token, 1)
    second = codec.create_user_token(TokenType.access_token, 1)

    assert first != second


def test_refresh_token_is_not_an_access_token():
    token = codec.create_user_token(TokenType.refresh_token, 42)

    result = codec.verify_access_token(token)
    assert result.is_err()
    assert result.error.code == codec.INVALID_TOKEN


def test_expired_token(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "ACCESS_TOKEN_EXPIRES_MINUTES", -1)
    token = codec.create_user_token(TokenType.access_token, 42)

    result = codec.verify_access_token(token)
    assert result.error.code == codec.TOKEN_EXPIRED


def test_forged_signature_is_rejected():
    token = jwt.encode({"type": "access-token", "userId": 1}, "not-the-secret", algorithm="HS256")

    assert codec.verify_access_token(token).error.code == codec.INVALID_TOKEN


def test_read_claims_skips_verification(monkeypatch):
    monkeypatch.setattr(ApplicationConfig, "REFRESH_TOKEN_EXPIRES_DAYS", -1)
    token = codec.create_user_token(TokenType.refresh_token, 7)

    assert codec.decode_token(token).is_err()
    assert codec.read_claims(token)["userId"] == 7
    assert codec.read_claims("garbage") is None


def test_reset_token_lifetime():
    token = codec.create_password_reset_token("123456")

    claims = codec.decode_token(token).value
    assert claims["code"] == "123456"
    assert timedelta(seconds=claims["exp"] - claims["iat"]) == timedelta(
        minutes=ApplicationConfig.PASSWORD_RESET_EXPIRES_MINUTES
    )
