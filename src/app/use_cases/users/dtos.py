"""
User Management DTOs

Field names are snake_case in Python and camelCase in JSON.
"""

from typing import List, Optional

from src.app.use_cases.auth.dtos import UserInfo
from src.app.use_cases.base_dto import CamelModel
from src.domain.entities import Gender, User


class CreateUserCommand(CamelModel):
    email: str
    username: str
    password: str
    full_name: str
    gender: Optional[Gender] = None
    is_admin: bool = False


class UpdateProfileCommand(CamelModel):
    full_name: Optional[str] = None
    gender: Optional[Gender] = None


class UpdateCredentialsCommand(CamelModel):
    email: Optional[str] = None
    username: Optional[str] = None
    new_password: Optional[str] = None
    confirm_password: Optional[str] = None


class UserProfile(CamelModel):
    """Profile as seen by the actor: email only for the owner or an admin"""

    id: int
    email: Optional[str] = None
    username: str
    is_admin: bool
    gender: Optional[Gender] = None
    full_name: str
    photo_profile: Optional[str] = None

    @classmethod
    def from_entity(cls, user: User, show_email: bool) -> "UserProfile":
        return cls(
            id=user.id,
            email=user.email if show_email else None,
            username=user.username,
            is_admin=user.is_admin,
            gender=user.gender,
            full_name=user.full_name,
            photo_profile=user.photo_profile,
        )


class UserPage(CamelModel):
    data: List[UserInfo]
    has_next: bool
    total: int
    filtered: int

    def body(self) -> dict:
        return {"data": [u.model_dump(by_alias=True) for u in self.data], "hasNext": self.has_next}
