from typing import NoReturn

from fastapi import status

from src.app.use_cases import errors as codes
from src.domain.result import Error

STATUS_BY_CODE = {
    codes.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    codes.INVALID_CODE: status.HTTP_400_BAD_REQUEST,
    codes.INVALID_RESET_TOKEN: status.HTTP_400_BAD_REQUEST,
    codes.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    codes.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    codes.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


class PageRedirect(Exception):
    """Raised by guards on page surfaces instead of an error response"""

    def __init__(self, location: str, status_code: int = status.HTTP_303_SEE_OTHER):
        self.location = location
        self.status_code = status_code
        super().__init__(location)


def raise_for_error(error: Error) -> NoReturn:
    """Turn a use case Error into the matching HTTP exception."""
    status_code = STATUS_BY_CODE.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
