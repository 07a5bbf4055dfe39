"""
models/identity.py
------------------
The authenticated caller, as decoded from a verified access token.

Not stored anywhere: it is rebuilt from the JWT claims on every request and
is the only value services use to scope store access.
"""

from dataclasses import dataclass

from app.models.user import UserRole


@dataclass(frozen=True)
class AuthIdentity:
    user_id: str
    tenant_id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    def has_role(self, required: UserRole) -> bool:
        return self.role.rank >= required.rank
