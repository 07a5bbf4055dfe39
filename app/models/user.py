"""
models/user.py
--------------
User record with role and tenant binding.

Role design:
  - 'admin':  Can invite users and upgrade the plan of their own tenant.
              Never subject to the free-plan note quota.
  - 'member': Can manage notes of their tenant, within the plan quota.

password_hash stores bcrypt hashes only; plain text is never stored and
never logged. The repr leaves it out on purpose.
"""

from dataclasses import dataclass, field
from enum import Enum as PyEnum

from app.db.base import generate_uuid


class UserRole(str, PyEnum):
    member = "member"
    admin = "admin"

    @property
    def rank(self) -> int:
        return ROLE_RANK[self]


# Ordered role set used by the role gate: a role satisfies every
# requirement ranked at or below it.
ROLE_RANK = {
    UserRole.member: 0,
    UserRole.admin: 1,
}


@dataclass(repr=False)
class User:
    email: str
    password_hash: str
    tenant_id: str
    role: UserRole = UserRole.member
    id: str = field(default_factory=generate_uuid)

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role.value}>"
