"""
schemas/note.py
---------------
Pydantic models for notes.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class NoteCreate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class NoteUpdate(BaseModel):
    # Typed loosely on purpose: a field that is absent or not a string is
    # ignored by the update instead of rejecting the whole request.
    title: Any = None
    content: Any = None


class NoteRead(BaseModel):
    id: str
    tenant_id: str
    user_id: str
    title: str
    content: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
