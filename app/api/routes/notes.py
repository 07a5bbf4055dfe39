"""
api/routes/notes.py
-------------------
Note endpoints, all scoped to the authenticated user's tenant.

POST   /notes        — Create a note (members on the free plan: max 3)
GET    /notes        — List the tenant's notes in creation order
GET    /notes/{id}   — Fetch one note
PUT    /notes/{id}   — Partial update of title and/or content
DELETE /notes/{id}   — Delete a note, returning its last state
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, status

from app.db.store import Store, get_store
from app.dependencies import get_current_member
from app.models.identity import AuthIdentity
from app.schemas.note import NoteCreate, NoteRead, NoteUpdate
from app.services.note_service import NoteService

router = APIRouter(prefix="/notes", tags=["Notes"])

StoreDep = Annotated[Store, Depends(get_store)]
IdentityDep = Annotated[AuthIdentity, Depends(get_current_member)]


@router.post(
    "",
    response_model=NoteRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a note",
)
async def create_note(
    store: StoreDep,
    identity: IdentityDep,
    body: Annotated[NoteCreate, Body()] = NoteCreate(),
) -> NoteRead:
    """
    Title defaults to "Untitled" and content to "" when omitted.
    Returns 402 once a free-plan tenant holds 3 notes and the caller is a
    member; admins are never limited.
    """
    note = NoteService.create_note(store, identity, body.title, body.content)
    return NoteRead.model_validate(note)


@router.get(
    "",
    response_model=list[NoteRead],
    summary="List notes of the current tenant",
)
async def list_notes(store: StoreDep, identity: IdentityDep) -> list[NoteRead]:
    notes = NoteService.list_notes(store, identity)
    return [NoteRead.model_validate(n) for n in notes]


@router.get("/{note_id}", response_model=NoteRead, summary="Get a note")
async def get_note(note_id: str, store: StoreDep, identity: IdentityDep) -> NoteRead:
    note = NoteService.get_note(store, identity, note_id)
    return NoteRead.model_validate(note)


@router.put("/{note_id}", response_model=NoteRead, summary="Update a note")
async def update_note(
    note_id: str,
    store: StoreDep,
    identity: IdentityDep,
    body: Annotated[NoteUpdate, Body()] = NoteUpdate(),
) -> NoteRead:
    """Only string-valued fields present in the body are changed."""
    note = NoteService.update_note(store, identity, note_id, body.title, body.content)
    return NoteRead.model_validate(note)


@router.delete("/{note_id}", response_model=NoteRead, summary="Delete a note")
async def delete_note(note_id: str, store: StoreDep, identity: IdentityDep) -> NoteRead:
    note = NoteService.delete_note(store, identity, note_id)
    return NoteRead.model_validate(note)
