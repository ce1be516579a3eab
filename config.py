import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    APP_NAME = data.get("APP_NAME", "Exzly")
    APP_VERSION = data.get("APP_VERSION", "0.1.0")
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./app.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    ADMIN_PREFIX = data.get("ADMIN_PREFIX", "/admin")
    WEB_PREFIX = data.get("WEB_PREFIX", "/")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    # Tokens
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRES_MINUTES = data.get("ACCESS_TOKEN_EXPIRES_MINUTES", 15)
    REFRESH_TOKEN_EXPIRES_DAYS = data.get("REFRESH_TOKEN_EXPIRES_DAYS", 7)
    VERIFICATION_CODE_EXPIRES_MINUTES = data.get("VERIFICATION_CODE_EXPIRES_MINUTES", 15)
    PASSWORD_RESET_EXPIRES_MINUTES = data.get("PASSWORD_RESET_EXPIRES_MINUTES", 10)
    BCRYPT_ROUNDS = data.get("BCRYPT_ROUNDS", 12)

    # Server-side sessions
    SESSION_COOKIE_NAME = data.get("SESSION_COOKIE_NAME", "exzly.sid")
    SESSION_EXPIRES_MINUTES = data.get("SESSION_EXPIRES_MINUTES", 60 * 24)
    SESSION_COOKIE_SECURE = bool(data.get("SESSION_COOKIE_SECURE", False))

    # Rate limits (slowapi notation)
    RATE_LIMIT_ENABLED = bool(data.get("RATE_LIMIT_ENABLED", True))
    RATE_LIMIT_SIGN_UP = data.get("RATE_LIMIT_SIGN_UP", "20/10 minutes")
    RATE_LIMIT_SIGN_IN = data.get("RATE_LIMIT_SIGN_IN", "30/5 minutes")
    RATE_LIMIT_VERIFICATION = data.get("RATE_LIMIT_VERIFICATION", "20/5 minutes")
    RATE_LIMIT_FORGOT_PASSWORD = data.get("RATE_LIMIT_FORGOT_PASSWORD", "40/10 minutes")

    # SMTP
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = data.get("SMTP_PORT", 587)
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASS = data.get("SMTP_PASS", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    SMTP_FROM = data.get("SMTP_FROM", "No Reply <no-reply@exzly.dev>")

    # Uploads
    STORAGE_PATH = data.get("STORAGE_PATH", os.path.join(ROOT_PATH, "storage"))
    PHOTO_MAX_SIZE_BYTES = data.get("PHOTO_MAX_SIZE_BYTES", 5 * 1024 * 1024)
    PHOTO_ALLOWED_MIME_TYPES = data.get(
        "PHOTO_ALLOWED_MIME_TYPES",
        ["image/png", "image/jpeg", "image/heic", "image/heif"],
    )

    # Listing
    DATA_DEFAULT_SIZE = data.get("DATA_DEFAULT_SIZE", 10)
    DATA_QUERY_SIZE_MAX = data.get("DATA_QUERY_SIZE_MAX", 100)
