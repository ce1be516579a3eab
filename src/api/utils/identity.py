"""
Session/Bearer resolution

Resolvers are tried in order; the first one that yields a user ID wins.
Each returns ``Result[Optional[int]]``: ok(None) when its channel carries
no credentials, err when it carries bad ones.
"""

import logging
import re
from typing import Awaitable, Callable, Optional, Sequence

from fastapi import Request, status

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.utils.jwt import TOKEN_EXPIRED, verify_access_token
from src.api.utils.session_cookie import get_session_id
from src.api.utils.surface import Surface, SurfacePrefixes, classify_surface
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.errors import UNAUTHORIZED
from src.domain.actor import Actor
from src.domain.base import utcnow
from src.domain.entities import TokenType
from src.domain.result import Error, Result, Return

logger = logging.getLogger(__name__)

Resolver = Callable[[Request, UnitOfWork], Awaitable[Result[Optional[int]]]]

# Paths relative to the API prefix where bad bearer credentials are ignored
PUBLIC_ROUTES = (
    re.compile(r"^/auth/(sign-(up|in|out)|refresh-token|(forgot|reset)-password|verification)/?$"),
)


def is_public_route(path: str, api_prefix: str = ApplicationConfig.API_PREFIX) -> bool:
    prefix = api_prefix.rstrip("/")
    if prefix and path.startswith(prefix):
        path = path[len(prefix):]
    return any(pattern.match(path) for pattern in PUBLIC_ROUTES)


def _unauthorized(message: str) -> Result:
    return Return.err(Error(UNAUTHORIZED, message))


async def bearer_resolver(request: Request, uow: UnitOfWork) -> Result[Optional[int]]:
    """Authorization: Bearer <access token>, API surface only."""
    if classify_surface(request.url.path, SurfacePrefixes.from_config(ApplicationConfig)) != Surface.api:
        return Return.ok(None)

    header = request.headers.get("Authorization")
    if not header:
        return Return.ok(None)

    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token:
        return _unauthorized("Invalid token")

    verified = verify_access_token(token)
    if verified.is_err():
        if verified.error.code == TOKEN_EXPIRED:
            return _unauthorized("Token expired")
        return _unauthorized("Invalid token")

    if await uow.auth_tokens.get_active(token, TokenType.access_token) is None:
        entry = await uow.auth_tokens.get_by_token(token)
        if entry is not None and entry.is_revoked:
            return _unauthorized("Token was revoked")
        return _unauthorized("Invalid token")

    return Return.ok(verified.value)


async def session_resolver(request: Request, uow: UnitOfWork) -> Result[Optional[int]]:
    """Server-side session referenced by the session cookie."""
    session_id = get_session_id(request)
    if not session_id:
        return Return.ok(None)

    web_session = await uow.web_sessions.get_by_id(session_id)
    if web_session is None or web_session.expires_at < utcnow():
        return Return.ok(None)

    return Return.ok(web_session.user_id)


RESOLVERS: Sequence[Resolver] = (bearer_resolver, session_resolver)


async def resolve_actor(
    request: Request, uow: UnitOfWork, resolvers: Sequence[Resolver] = RESOLVERS
) -> Optional[Actor]:
    """
    Resolve the acting user for a request.

    Raises:
        ClientError: 401 when credentials are bad and the route is not public
    """
    public = is_public_route(request.url.path)

    async with uow:
        user_id = None
        resolved_by = None
        for resolver in resolvers:
            result = await resolver(request, uow)
            if result.is_err():
                if public:
                    continue
                raise ClientError(result.error, status_code=status.HTTP_401_UNAUTHORIZED)
            if result.value is not None:
                user_id = result.value
                resolved_by = resolver
                break

        if user_id is None:
            return None

        user = await uow.users.get_by_id(user_id)
        if user is None:
            session_id = get_session_id(request)
            if session_id and resolved_by is session_resolver:
                logger.info("Dropping session of missing or trashed user %s", user_id)
                await uow.web_sessions.delete(session_id)
                await uow.commit()
            return None

        return Actor.from_user(user)
