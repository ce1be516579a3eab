from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from pydantic import EmailStr, Field, field_validator

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.guards import require_admin, require_authenticated
from src.app.services.photo_storage import IPhotoStorage
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import SuccessResponse, UserInfo
from src.app.use_cases.base_dto import CamelModel
from src.app.use_cases.users import (
    CreateUserCommand,
    CreateUserUseCase,
    DeleteUserUseCase,
    GetProfileUseCase,
    ListUsersUseCase,
    RestoreUserUseCase,
    UpdateCredentialsCommand,
    UpdateCredentialsUseCase,
    UpdatePhotoUseCase,
    UpdateProfileCommand,
    UpdateProfileUseCase,
    UserProfile,
)
from src.depends import get_photo_storage, get_unit_of_work
from src.domain import rules
from src.domain.actor import Actor
from src.domain.entities import Gender

router = APIRouter(prefix="/users", tags=["Users"])


def _check_username(value: Optional[str]) -> Optional[str]:
    if value is not None and not rules.is_valid_username(value):
        raise ValueError(rules.USERNAME_FORMAT_MESSAGE)
    return value


@router.get("", status_code=status.HTTP_200_OK)
async def list_users(
    response: Response,
    size: int = Query(
        ApplicationConfig.DATA_DEFAULT_SIZE, ge=1, le=ApplicationConfig.DATA_QUERY_SIZE_MAX
    ),
    skip: int = Query(0, ge=0),
    in_trash: bool = Query(False, alias="in-trash"),
    search: Optional[str] = Query(None, max_length=rules.FULL_NAME_MAX),
    actor: Actor = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Page through users (admin only).

    Body is ``{data, hasNext}``; totals travel in X-Total-Count and
    X-Filtered-Count.
    """
    result = await ListUsersUseCase(uow).execute(search, in_trash, size, skip)

    if result.is_err():
        raise_for_error(result.error)

    page = result.value
    response.headers["X-Total-Count"] = str(page.total)
    response.headers["X-Filtered-Count"] = str(page.filtered)
    return page.body()


class CreateUserRequest(CamelModel):
    email: EmailStr
    username: str = Field(..., min_length=1, max_length=rules.USERNAME_MAX)
    password: str = Field(..., min_length=rules.PASSWORD_MIN, max_length=rules.PASSWORD_MAX)
    full_name: str = Field(..., min_length=rules.FULL_NAME_MIN, max_length=rules.FULL_NAME_MAX)
    gender: Optional[Gender] = None
    is_admin: bool = False

    @field_validator("username")
    @classmethod
    def username_format(cls, value: Optional[str]) -> Optional[str]:
        return _check_username(value)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=UserInfo)
async def create_user(
    payload: CreateUserRequest,
    actor: Actor = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create a user (admin only).

    Raises:
        - 400 Bad Request: invalid format, email or username taken
        - 403 Forbidden: not an admin
    """
    result = await CreateUserUseCase(uow).execute(CreateUserCommand(**payload.model_dump()))

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/profile", status_code=status.HTTP_200_OK, response_model=UserProfile)
async def get_own_profile(
    actor: Actor = Depends(require_authenticated),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await get_profile(actor.id, actor, uow)


@router.get("/profile/{user_id}", status_code=status.HTTP_200_OK, response_model=UserProfile)
async def get_profile(
    user_id: int,
    actor: Actor = Depends(require_authenticated),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Read a profile; the email is hidden from other non-admin users."""
    result = await GetProfileUseCase(uow).execute(actor, user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateProfileRequest(CamelModel):
    full_name: Optional[str] = Field(
        None, min_length=rules.FULL_NAME_MIN, max_length=rules.FULL_NAME_MAX
    )
    gender: Optional[Gender] = None


@router.put("/profile", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def update_own_profile(
    payload: UpdateProfileRequest,
    actor: Actor = Depends(require_authenticated),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return await update_profile(actor.id, payload, actor, uow)


@router.put("/profile/{user_id}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def update_profile(
    user_id: int,
    payload: UpdateProfileRequest,
    actor: Actor = Depends(require_authenticated),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update full name and gender (owner or admin).

    Raises:
        - 403 Forbidden: not the owner
        - 404 Not Found
    """
    command = UpdateProfileCommand(**payload.model_dump(exclude_unset=True))
    result = await UpdateProfileUseCase(uow).execute(actor, user_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete("/profile/{user_id}", status_code=status.HTTP_200_OK, response_model=SuccessResponse)
async def delete_user(
    user_id: int,
    in_trash: bool = Query(False, alias="in-trash"),
    actor: Actor = Depends(require_authenticated),
    uow: UnitOfWork = Depends(get_unit_of_work),
    photo_storage: IPhotoStorage = Depends(get_photo_storage),
):
    """
    Move a user to trash, or purge a trashed user with ``?in-trash=true``.

    Raises:
        - 400 Bad Request: an admin deleting their own account
        - 403 Forbidden: not the owner
        - 404 Not Found
    """
    result = await DeleteUserUseCase(uow, photo_storage).execute(actor, user_id, in_trash)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch("/profile/{user_id}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def restore_user(
    user_id: int,
    actor: Actor = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Restore a trashed user (admin only).

    Raises:
        - 400 Bad Request: not in trash, or email/username taken meanwhile
        - 404 Not Found
    """
    result = await RestoreUserUseCase(uow).execute(user_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.put("/profile/{user_id}/photo", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def update_photo(
    user_id: int,
    photo: Optional[UploadFile] = File(None),
    remove: bool = Query(False),
    actor: Actor = Depends(require_authenticated),
    uow: UnitOfWork = Depends(get_unit_of_work),
    photo_storage: IPhotoStorage = Depends(get_photo_storage),
):
    """
    Upload a profile photo, or drop it with ``?remove=true``.

    Raises:
        - 400 Bad Request: no photo, unsupported type or too large
        - 403 Forbidden: not the owner
    """
    content_type = None
    data = None
    if photo is not None and not remove:
        content_type = photo.content_type
        # One byte past the limit is enough to reject
        data = await photo.read(ApplicationConfig.PHOTO_MAX_SIZE_BYTES + 1)

    result = await UpdatePhotoUseCase(uow, photo_storage).execute(
        actor, user_id, content_type=content_type, data=data, remove=remove
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class UpdateCredentialsRequest(CamelModel):
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, min_length=1, max_length=rules.USERNAME_MAX)
    new_password: Optional[str] = Field(
        None, min_length=rules.PASSWORD_MIN, max_length=rules.PASSWORD_MAX
    )
    confirm_password: Optional[str] = None

    @field_validator("username")
    @classmethod
    def username_format(cls, value: Optional[str]) -> Optional[str]:
        return _check_username(value)


@router.put("/credentials/{user_id}", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def update_credentials(
    user_id: int,
    payload: UpdateCredentialsRequest,
    actor: Actor = Depends(require_authenticated),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change email, username or password (owner or admin).

    Raises:
        - 400 Bad Request: taken email/username, passwords differ
        - 403 Forbidden: not the owner
        - 404 Not Found
    """
    command = UpdateCredentialsCommand(**payload.model_dump())
    result = await UpdateCredentialsUseCase(uow).execute(actor, user_id, command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
