"""
db/store.py
-----------
In-memory store for tenants, users and notes, plus the FastAPI dependency
that hands it to route handlers.

Lifecycle:
  - One Store is created by the application factory and kept on app.state.
  - The lifespan hook seeds it with the demo tenants on startup and clears
    it on shutdown. Nothing survives a restart.

Concurrency:
  Handlers run on a single event loop, but every mutation and every
  read-then-write sequence (quota count then insert, duplicate-email check
  then insert) still goes through `store.lock`. Callers composing several
  helpers into one decision hold the lock around the whole sequence; the
  lock is re-entrant so the helpers can take it again.
"""

import threading
from typing import Optional

from fastapi import Request

from app.core.logging import get_logger
from app.models.note import Note
from app.models.tenant import Tenant, TenantPlan
from app.models.user import User, UserRole

logger = get_logger(__name__)

DEMO_TENANTS = (
    ("acme", "Acme"),
    ("globex", "Globex"),
)


class Store:

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self.tenants: list[Tenant] = []
        self.users: list[User] = []
        self.notes: list[Note] = []

    # ── Tenants ───────────────────────────────────────────────────────────────

    def add_tenant(self, tenant: Tenant) -> Tenant:
        with self.lock:
            self.tenants.append(tenant)
        return tenant

    def get_tenant(self, tenant_id: str) -> Optional[Tenant]:
        return next((t for t in self.tenants if t.id == tenant_id), None)

    def find_tenant_by_slug(self, slug: Optional[str]) -> Optional[Tenant]:
        """Case-insensitive exact match on slug; first match wins."""
        if not slug:
            return None
        wanted = slug.lower()
        return next((t for t in self.tenants if t.slug.lower() == wanted), None)

    def upgrade_tenant_to_pro(self, tenant: Tenant) -> Tenant:
        """Idempotent: upgrading an already-pro tenant changes nothing."""
        with self.lock:
            tenant.plan = TenantPlan.pro
        return tenant

    # ── Users ─────────────────────────────────────────────────────────────────

    def add_user(self, user: User) -> User:
        with self.lock:
            self.users.append(user)
        return user

    def find_user_by_email(self, email: Optional[str]) -> Optional[User]:
        """
        Email lookup is global and case-insensitive.

        Uniqueness is enforced across all tenants, not per tenant, so an
        address registered in one company cannot be used in another.
        """
        wanted = (email or "").lower()
        return next((u for u in self.users if u.email.lower() == wanted), None)

    def email_exists(self, email: Optional[str]) -> bool:
        return self.find_user_by_email(email) is not None

    # ── Notes ─────────────────────────────────────────────────────────────────

    def add_note(self, note: Note) -> Note:
        with self.lock:
            self.notes.append(note)
        return note

    def notes_count_for_tenant(self, tenant_id: str) -> int:
        return sum(1 for n in self.notes if n.tenant_id == tenant_id)

    def list_notes_for_tenant(self, tenant_id: str) -> list[Note]:
        """Notes of one tenant, in insertion order."""
        return [n for n in self.notes if n.tenant_id == tenant_id]

    def find_note(self, note_id: str, tenant_id: str) -> Optional[Note]:
        """
        Both id and tenant must match. An id that exists under another
        tenant is indistinguishable from one that does not exist.
        """
        return next(
            (n for n in self.notes if n.id == note_id and n.tenant_id == tenant_id),
            None,
        )

    def delete_note(self, note_id: str, tenant_id: str) -> Optional[Note]:
        with self.lock:
            for idx, note in enumerate(self.notes):
                if note.id == note_id and note.tenant_id == tenant_id:
                    return self.notes.pop(idx)
        return None

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    def seed_if_empty(self, password_hash: str) -> bool:
        """
        Create the demo tenants (acme, globex) with one admin and one member
        each, all sharing `password_hash`. No-op once any tenant exists.

        Returns True if data was seeded.
        """
        with self.lock:
            if self.tenants:
                return False

            for slug, name in DEMO_TENANTS:
                tenant = self.add_tenant(Tenant(slug=slug, name=name))
                self.add_user(User(
                    email=f"admin@{slug}.test",
                    password_hash=password_hash,
                    role=UserRole.admin,
                    tenant_id=tenant.id,
                ))
                self.add_user(User(
                    email=f"user@{slug}.test",
                    password_hash=password_hash,
                    role=UserRole.member,
                    tenant_id=tenant.id,
                ))

        logger.info(
            "Demo data seeded",
            tenants=len(self.tenants),
            users=len(self.users),
        )
        return True

    def clear(self) -> None:
        with self.lock:
            self.tenants.clear()
            self.users.clear()
            self.notes.clear()


def get_store(request: Request) -> Store:
    """
    FastAPI dependency that returns the application's store.

    Usage:
        @router.get("/example")
        async def handler(store: Annotated[Store, Depends(get_store)]):
            ...
    """
    return request.app.state.store
