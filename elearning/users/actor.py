"""
Explicit actor passed into every progress / ordering service call.

Views build it from the authenticated request user; services never read
request state themselves.
"""

from dataclasses import dataclass

from .models import Role, get_role


@dataclass(frozen=True)
class Actor:
    id: int
    role: str

    @classmethod
    def from_user(cls, user) -> "Actor":
        return cls(id=user.pk, role=get_role(user))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_instructor(self) -> bool:
        return self.role == Role.INSTRUCTOR

    @property
    def is_player(self) -> bool:
        return self.role == Role.PLAYER

    @property
    def is_staff_member(self) -> bool:
        """Instructors and admins."""
        return self.is_admin or self.is_instructor
