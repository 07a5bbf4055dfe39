"""
models/__init__.py
------------------
Re-export all records so callers can import them from one place:

    from app.models import Tenant, User, Note
"""

from app.models.identity import AuthIdentity
from app.models.note import Note
from app.models.tenant import Tenant, TenantPlan
from app.models.user import ROLE_RANK, User, UserRole

__all__ = [
    "AuthIdentity",
    "Note",
    "ROLE_RANK",
    "Tenant",
    "TenantPlan",
    "User",
    "UserRole",
]
