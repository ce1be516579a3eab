from typing import Optional

from fastapi import Request, Response

from config import ApplicationConfig


def get_session_id(request: Request) -> Optional[str]:
    return request.cookies.get(ApplicationConfig.SESSION_COOKIE_NAME)


def set_session_cookie(response: Response, session_id: str, max_age_minutes: int) -> None:
    response.set_cookie(
        ApplicationConfig.SESSION_COOKIE_NAME,
        session_id,
        max_age=max_age_minutes * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=ApplicationConfig.SESSION_COOKIE_SECURE,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(ApplicationConfig.SESSION_COOKIE_NAME, path="/")
