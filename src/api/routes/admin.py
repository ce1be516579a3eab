"""
Admin panel pages

Sign-in and forgot-password are for anonymous visitors only; every
other page requires an admin.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.guards import require_admin
from src.api.utils.pages import render_page
from src.api.utils.session_cookie import clear_session_cookie, get_session_id
from src.api.utils.surface import join_path
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import EndSessionUseCase
from src.app.use_cases.users import ListUsersUseCase
from src.depends import get_actor, get_unit_of_work
from src.domain import rules
from src.domain.actor import Actor

router = APIRouter(tags=["Admin"])


def _redirect(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)


def _away_from_guest_page(actor: Optional[Actor]) -> Optional[RedirectResponse]:
    """Signed-in admins go to the dashboard, other users to the web root."""
    if actor is None:
        return None
    if actor.is_admin:
        return _redirect(join_path(ApplicationConfig.ADMIN_PREFIX))
    return _redirect(join_path(ApplicationConfig.WEB_PREFIX))


@router.get("/sign-in")
async def sign_in_page(actor: Optional[Actor] = Depends(get_actor)):
    return _away_from_guest_page(actor) or render_page("admin/sign-in")


@router.get("/forgot-password")
async def forgot_password_page(actor: Optional[Actor] = Depends(get_actor)):
    return _away_from_guest_page(actor) or render_page("admin/forgot-password")


@router.get("/sign-out")
async def sign_out_page(request: Request, uow: UnitOfWork = Depends(get_unit_of_work)):
    await EndSessionUseCase(uow).execute(get_session_id(request))
    response = _redirect(join_path(ApplicationConfig.ADMIN_PREFIX, "/sign-in"))
    clear_session_cookie(response)
    return response


@router.get("")
async def dashboard(
    actor: Actor = Depends(require_admin), uow: UnitOfWork = Depends(get_unit_of_work)
):
    use_case = ListUsersUseCase(uow)
    active = await use_case.execute(None, False, 1, 0)
    trashed = await use_case.execute(None, True, 1, 0)

    for result in (active, trashed):
        if result.is_err():
            raise_for_error(result.error)

    return render_page(
        "admin/dashboard", {"total": active.value.total, "trashed": trashed.value.total}
    )


@router.get("/users")
async def users_page(
    skip: int = Query(0, ge=0),
    search: Optional[str] = Query(None, max_length=rules.FULL_NAME_MAX),
    in_trash: bool = Query(False, alias="in-trash"),
    actor: Actor = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListUsersUseCase(uow).execute(
        search, in_trash, ApplicationConfig.DATA_QUERY_SIZE_MAX, skip
    )
    if result.is_err():
        raise_for_error(result.error)

    return render_page("admin/users", {"users": result.value.data})
