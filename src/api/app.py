import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.app.use_cases.errors import FORBIDDEN, NOT_FOUND, UNAUTHORIZED, VALIDATION_ERROR

from .error import STATUS_BY_CODE, ClientError, PageRedirect, ServerError
from .utils.pages import render_page
from .utils.rate_limit import limiter, rate_limit_exceeded_handler
from .utils.surface import Surface, SurfacePrefixes, classify_surface, join_path

logger = logging.getLogger(__name__)

CODE_BY_STATUS = {
    status.HTTP_401_UNAUTHORIZED: UNAUTHORIZED,
    status.HTTP_403_FORBIDDEN: FORBIDDEN,
    status.HTTP_404_NOT_FOUND: NOT_FOUND,
}


def _error_body(code: str, message: str, details=None) -> dict:
    error_dict = {"code": code, "message": message}
    if details:
        error_dict["details"] = details
    return {"error": error_dict}


def _surface(request: Request) -> Surface:
    return classify_surface(request.url.path, request.app.state.surface_prefixes)


def _error_page(request: Request, status_code: int, message: str):
    """Page surfaces: admin visitors without a session go to the web root."""
    actor = getattr(request.state, "actor", None)
    if _surface(request) == Surface.admin and actor is None:
        web_root = join_path(request.app.state.config.WEB_PREFIX)
        return RedirectResponse(web_root, status_code=status.HTTP_303_SEE_OTHER)
    return render_page("error", {"status_code": status_code, "message": message}, status_code)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")

    if _surface(request) != Surface.api:
        return _error_page(request, exc.status_code, exc.base_error.message)

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(
            exc.base_error.code, exc.base_error.message, exc.base_error.details
        ),
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    status_code = STATUS_BY_CODE.get(exc.base_error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if _surface(request) != Surface.api:
        return _error_page(request, status_code, "Internal server error")

    return JSONResponse(
        status_code=status_code,
        content=_error_body(exc.base_error.code, exc.base_error.message),
    )


def _validation_message(error: dict) -> str:
    message = error.get("msg", "Invalid value")
    # pydantic prefixes messages raised from validators
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return message


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = []
    for error in exc.errors():
        location = error.get("loc", ())
        details.append(
            {
                "path": ".".join(str(part) for part in location[1:]),
                "location": location[0] if location else "body",
                "message": _validation_message(error),
                "type": error.get("type"),
            }
        )
    logger.warning(f"Validation error on {request.url.path}: {details}")

    if _surface(request) != Surface.api:
        return _error_page(request, status.HTTP_400_BAD_REQUEST, "Validation error")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(VALIDATION_ERROR, "Validation error", details),
    )


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    code = CODE_BY_STATUS.get(exc.status_code, "HTTP_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else "Error"

    if _surface(request) != Surface.api:
        return _error_page(request, exc.status_code, message)

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(code, message),
        headers=getattr(exc, "headers", None),
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.url.path}")
    config = request.app.state.config
    message = "Database error" if config.ENVIRONMENT == "production" else str(exc)

    if _surface(request) != Surface.api:
        return _error_page(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("DATABASE_ERROR", message),
    )


async def handle_page_redirect(request: Request, exc: PageRedirect):
    return RedirectResponse(exc.location, status_code=exc.status_code)


def _prefix(path: str) -> str:
    return path.rstrip("/")


def create_app(ApplicationConfig) -> FastAPI:
    app = FastAPI(title=ApplicationConfig.APP_NAME, version=ApplicationConfig.APP_VERSION)
    app.state.config = ApplicationConfig
    app.state.surface_prefixes = SurfacePrefixes.from_config(ApplicationConfig)
    app.state.limiter = limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Total-Count", "X-Filtered-Count"],
    )

    from src.api.routes import admin, auth, index, users, web
    from src.depends import get_actor

    resolve = [Depends(get_actor)]
    api_prefix = _prefix(ApplicationConfig.API_PREFIX)

    app.include_router(index.router, prefix=api_prefix, tags=["Index"])
    app.include_router(auth.router, prefix=api_prefix, dependencies=resolve)
    app.include_router(users.router, prefix=api_prefix, dependencies=resolve)
    app.include_router(admin.router, prefix=_prefix(ApplicationConfig.ADMIN_PREFIX), dependencies=resolve)
    app.include_router(web.router, prefix=_prefix(ApplicationConfig.WEB_PREFIX), dependencies=resolve)

    app.mount(
        "/storage",
        StaticFiles(directory=ApplicationConfig.STORAGE_PATH, check_dir=False),
        name="storage",
    )

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(PageRedirect, handle_page_redirect)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    return app
