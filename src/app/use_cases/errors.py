"""
Error codes returned by use cases.

The API layer owns the code -> HTTP status mapping.
"""

from src.domain.result import Error

VALIDATION_ERROR = "VALIDATION_ERROR"
UNAUTHORIZED = "UNAUTHORIZED"
FORBIDDEN = "FORBIDDEN"
NOT_FOUND = "NOT_FOUND"
INVALID_CODE = "INVALID_CODE"
INVALID_RESET_TOKEN = "INVALID_RESET_TOKEN"
EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"


def field_error(path: str, message: str, location: str = "body") -> dict:
    return {"path": path, "location": location, "message": message}


def validation_error(*details: dict) -> Error:
    return Error(VALIDATION_ERROR, "Validation error", list(details))


def user_not_found() -> Error:
    return Error(NOT_FOUND, "User not found")


def permission_denied() -> Error:
    return Error(FORBIDDEN, "Permission denied")
