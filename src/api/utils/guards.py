"""
Authorization guards

FastAPI dependencies layered on top of actor resolution. On page
surfaces a failed guard redirects; on the API it raises.
"""

from typing import Optional

from fastapi import Depends, Request, status

from config import ApplicationConfig
from src.api.error import ClientError, PageRedirect
from src.api.utils.surface import Surface, SurfacePrefixes, classify_surface, join_path
from src.app.use_cases.errors import UNAUTHORIZED, permission_denied
from src.depends import get_actor
from src.domain.actor import Actor
from src.domain.result import Error


def _surface(request: Request) -> Surface:
    return classify_surface(request.url.path, SurfacePrefixes.from_config(ApplicationConfig))


async def require_authenticated(
    request: Request, actor: Optional[Actor] = Depends(get_actor)
) -> Actor:
    if actor is not None:
        return actor

    surface = _surface(request)
    if surface == Surface.admin:
        raise PageRedirect(join_path(ApplicationConfig.ADMIN_PREFIX, "/sign-in"))
    if surface == Surface.web:
        raise PageRedirect(join_path(ApplicationConfig.WEB_PREFIX, "/sign-in"))
    raise ClientError(Error(UNAUTHORIZED, "Unauthorized"), status_code=status.HTTP_401_UNAUTHORIZED)


async def require_admin(request: Request, actor: Actor = Depends(require_authenticated)) -> Actor:
    if actor.is_admin:
        return actor

    if _surface(request) != Surface.api:
        raise PageRedirect(join_path(ApplicationConfig.WEB_PREFIX))
    raise ClientError(permission_denied(), status_code=status.HTTP_403_FORBIDDEN)
