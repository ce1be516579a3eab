"""
User Management Use Cases

All user-related business logic.
"""

from .list_users_use_case import ListUsersUseCase
from .create_user_use_case import CreateUserUseCase
from .get_profile_use_case import GetProfileUseCase
from .update_profile_use_case import UpdateProfileUseCase
from .delete_user_use_case import DeleteUserUseCase
from .restore_user_use_case import RestoreUserUseCase
from .update_photo_use_case import UpdatePhotoUseCase
from .update_credentials_use_case import UpdateCredentialsUseCase
from .dtos import (
    CreateUserCommand,
    UpdateProfileCommand,
    UpdateCredentialsCommand,
    UserProfile,
    UserPage,
)

__all__ = [
    "ListUsersUseCase",
    "CreateUserUseCase",
    "GetProfileUseCase",
    "UpdateProfileUseCase",
    "DeleteUserUseCase",
    "RestoreUserUseCase",
    "UpdatePhotoUseCase",
    "UpdateCredentialsUseCase",
    "CreateUserCommand",
    "UpdateProfileCommand",
    "UpdateCredentialsCommand",
    "UserProfile",
    "UserPage",
]
