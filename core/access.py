# core/access.py
from dataclasses import dataclass

from core.errors import AccessDeniedError

ROLE_USER = "user"
ROLE_ADMIN = "admin"
ROLES = (ROLE_USER, ROLE_ADMIN)


@dataclass(frozen=True)
class Actor:
    """Who is calling: an already-authenticated user id plus the role to authorize against."""

    user_id: int
    role: str = ROLE_USER
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @classmethod
    def from_user(cls, user):
        return cls(user_id=user.id, role=user.role, email=user.email)


def require_admin(actor: Actor, message: str = "Admins only"):
    if actor is None or not actor.is_admin:
        raise AccessDeniedError(message)


def require_owner_or_admin(actor: Actor, owner_id, message: str = "Not allowed to view this order"):
    if actor is None:
        raise AccessDeniedError(message)
    if actor.is_admin:
        return
    if str(actor.user_id) != str(owner_id):
        raise AccessDeniedError(message)
