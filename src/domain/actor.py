from dataclasses import dataclass

from src.domain.entities import User


@dataclass(frozen=True)
class Actor:
    """Identity resolved for the current request, detached from the ORM session"""

    id: int
    email: str
    username: str
    is_admin: bool

    @classmethod
    def from_user(cls, user: User) -> "Actor":
        return cls(
            id=user.id, email=user.email, username=user.username, is_admin=user.is_admin
        )
