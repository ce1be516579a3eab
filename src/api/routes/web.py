"""
Public web pages

Anonymous-only pages redirect signed-in users home; the verification
link from the reset email lands here.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import RedirectResponse

from config import ApplicationConfig
from src.api.error import ClientError
from src.api.utils.guards import require_authenticated
from src.api.utils.pages import render_page
from src.api.utils.session_cookie import (
    clear_session_cookie,
    get_session_id,
    set_session_cookie,
)
from src.api.utils.surface import join_path
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import EndSessionUseCase, PendingResetUseCase, VerificationUseCase
from src.depends import get_actor, get_unit_of_work
from src.domain.actor import Actor

router = APIRouter(tags=["Web"])


def _redirect(path: str = "/") -> RedirectResponse:
    return RedirectResponse(
        join_path(ApplicationConfig.WEB_PREFIX, path), status_code=status.HTTP_303_SEE_OTHER
    )


@router.get("/")
async def home(actor: Optional[Actor] = Depends(get_actor)):
    return render_page("web/home", {"actor": actor})


@router.get("/sign-in")
async def sign_in_page(actor: Optional[Actor] = Depends(get_actor)):
    if actor is not None:
        return _redirect()
    return render_page("web/sign-in")


@router.get("/sign-up")
async def sign_up_page(actor: Optional[Actor] = Depends(get_actor)):
    if actor is not None:
        return _redirect()
    return render_page("web/sign-up")


@router.get("/forgot-password")
async def forgot_password_page(actor: Optional[Actor] = Depends(get_actor)):
    if actor is not None:
        return _redirect()
    return render_page("web/forgot-password")


@router.get("/sign-out")
async def sign_out_page(request: Request, uow: UnitOfWork = Depends(get_unit_of_work)):
    await EndSessionUseCase(uow).execute(get_session_id(request))
    response = _redirect()
    clear_session_cookie(response)
    return response


@router.get("/verification")
async def verification_page(
    request: Request,
    token: Optional[str] = Query(None, max_length=40),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Code entry form, or redemption of the emailed link when ``token`` is given."""
    if not token:
        return render_page("web/verification")

    result = await VerificationUseCase(uow).execute_link(token, get_session_id(request))
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_400_BAD_REQUEST)

    response = _redirect("/reset-password")
    if result.value.guest_session:
        set_session_cookie(
            response, result.value.session_id, ApplicationConfig.PASSWORD_RESET_EXPIRES_MINUTES
        )
    return response


@router.get("/reset-password")
async def reset_password_page(request: Request, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await PendingResetUseCase(uow).execute(get_session_id(request))
    if result.is_err():
        raise ClientError(result.error, status_code=status.HTTP_404_NOT_FOUND)

    return render_page("web/reset-password", {"token": result.value})


@router.get("/account")
async def account_page(actor: Actor = Depends(require_authenticated)):
    return render_page("web/account", {"actor": actor})
