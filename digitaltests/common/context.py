"""
Authenticated caller identity, passed explicitly into service operations.
"""
from dataclasses import dataclass


ROLE_ADMIN = "Admin"
ROLE_USER = "User"


@dataclass(frozen=True)
class AuthContext:
    user_id: int
    role: str
    active: bool

    @classmethod
    def from_user(cls, user) -> "AuthContext":
        return cls(user_id=user.id, role=user.role, active=bool(user.active))

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
