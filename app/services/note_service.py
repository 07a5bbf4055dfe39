"""
services/note_service.py
------------------------
Business logic for notes.

Critical security invariant:
  Every lookup filters on BOTH note id and the caller's tenant_id. A note
  owned by another tenant is reported exactly like a missing one
  (NotFound), so ids from other tenants reveal nothing.
"""

from typing import Any, Optional

from app.core.config import settings
from app.core.exceptions import NotFound, QuotaExceeded
from app.core.logging import get_logger
from app.db.store import Store
from app.models.identity import AuthIdentity
from app.models.note import Note
from app.services.tenant_service import TenantService

logger = get_logger(__name__)


class NoteService:

    @staticmethod
    def create_note(
        store: Store,
        identity: AuthIdentity,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Note:
        """
        Insert a note owned by the caller and their tenant.

        Members of a free-plan tenant are limited to FREE_PLAN_NOTE_LIMIT
        notes per tenant; admins are exempt whatever the plan.
        """
        with store.lock:
            tenant = TenantService.get_mine(store, identity)

            if not identity.is_admin and tenant.is_free_plan_limited:
                count = store.notes_count_for_tenant(tenant.id)
                if count >= settings.FREE_PLAN_NOTE_LIMIT:
                    logger.info(
                        "Note quota reached",
                        tenant_id=tenant.id,
                        user_id=identity.user_id,
                        count=count,
                    )
                    raise QuotaExceeded()

            note = store.add_note(Note(
                tenant_id=identity.tenant_id,
                user_id=identity.user_id,
                title=title or "Untitled",
                content=content or "",
            ))

        logger.info("Note created", note_id=note.id, tenant_id=note.tenant_id)
        return note

    @staticmethod
    def list_notes(store: Store, identity: AuthIdentity) -> list[Note]:
        return store.list_notes_for_tenant(identity.tenant_id)

    @staticmethod
    def get_note(store: Store, identity: AuthIdentity, note_id: str) -> Note:
        note = store.find_note(note_id, identity.tenant_id)
        if note is None:
            raise NotFound()
        return note

    @staticmethod
    def update_note(
        store: Store,
        identity: AuthIdentity,
        note_id: str,
        title: Any = None,
        content: Any = None,
    ) -> Note:
        """
        Apply a partial update. Only string values are written; anything
        else (absent, null, numbers...) leaves the field as it was.
        updated_at is refreshed on every successful call.
        """
        with store.lock:
            note = NoteService.get_note(store, identity, note_id)
            if isinstance(title, str):
                note.title = title
            if isinstance(content, str):
                note.content = content
            note.touch()

        logger.info("Note updated", note_id=note.id, tenant_id=note.tenant_id)
        return note

    @staticmethod
    def delete_note(store: Store, identity: AuthIdentity, note_id: str) -> Note:
        """Remove the note and return its last state."""
        note = store.delete_note(note_id, identity.tenant_id)
        if note is None:
            raise NotFound()
        logger.info("Note deleted", note_id=note.id, tenant_id=note.tenant_id)
        return note
