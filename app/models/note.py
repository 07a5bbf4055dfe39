"""
models/note.py
--------------
Note record.

tenant_id and user_id are always copied from the authenticated identity at
creation time and tenant_id never changes afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from app.db.base import generate_uuid, utc_now


@dataclass(repr=False)
class Note:
    tenant_id: str
    user_id: str
    title: str = "Untitled"
    content: str = ""
    id: str = field(default_factory=generate_uuid)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    def touch(self) -> None:
        """Refresh updated_at, guaranteeing it moves strictly forward."""
        now = utc_now()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def __repr__(self) -> str:
        return f"<Note id={self.id} tenant_id={self.tenant_id}>"
