"""Explicit caller identity for policy calls."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Actor:
    """Who is calling: a user id (None for anonymous) and the admin flag."""

    user_id: Optional[int]
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def sender_type(self) -> str:
        return "admin" if self.is_admin else "client"

    @classmethod
    def from_user(cls, user) -> "Actor":
        """Build an actor from a Django user; staff users are admins."""
        if user is None or not user.is_authenticated:
            return ANONYMOUS
        return cls(user_id=user.id, is_admin=bool(user.is_staff))


ANONYMOUS = Actor(user_id=None)
