"""
Endpoints de notas. Todos requieren Bearer token y operan solo sobre
las notas del usuario autenticado.
"""
from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from notes_api.api.deps import AuthContext, get_current_identity, get_db
from notes_api.api.schemas.note import (
    MessageOut,
    NoteCreate,
    NoteCreateResponse,
    NoteDetailOut,
    NoteListOut,
    NoteOut,
    NoteUpdate,
)
from notes_api.services import note_service as service


router = APIRouter(tags=["Note"])


@router.post(
    "/add-note",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteCreateResponse,
    summary="Crear nota",
)
def add_note(
    payload: NoteCreate,
    identity: AuthContext = Depends(get_current_identity),
    db: Database = Depends(get_db),
) -> NoteCreateResponse:
    note = service.add_note(db, identity.user_id, payload)
    return NoteCreateResponse(message="Note added successfully", note=NoteOut.from_doc(note))


@router.put(
    "/edit-note/{note_id}",
    response_model=NoteCreateResponse,
    summary="Editar nota",
    description="Actualización parcial: solo cambian los campos enviados.",
)
def edit_note(
    note_id: str,
    payload: NoteUpdate,
    identity: AuthContext = Depends(get_current_identity),
    db: Database = Depends(get_db),
) -> NoteCreateResponse:
    note = service.edit_note(db, identity.user_id, note_id, payload)
    return NoteCreateResponse(message="Note updated successfully", note=NoteOut.from_doc(note))


@router.get("/get-note/{note_id}", response_model=NoteDetailOut, summary="Obtener nota")
def get_note(
    note_id: str,
    identity: AuthContext = Depends(get_current_identity),
    db: Database = Depends(get_db),
) -> NoteDetailOut:
    note = service.get_note(db, identity.user_id, note_id)
    return NoteDetailOut(note=NoteOut.from_doc(note))


@router.get(
    "/get-all-notes",
    response_model=NoteListOut,
    summary="Listar notas",
    description="Notas del usuario, fijadas primero.",
)
def get_all_notes(
    identity: AuthContext = Depends(get_current_identity),
    db: Database = Depends(get_db),
) -> NoteListOut:
    items = service.list_notes(db, identity.user_id)
    return NoteListOut(message="Notes fetched successfully", notes=[NoteOut.from_doc(i) for i in items])


@router.delete("/delete-note/{note_id}", response_model=MessageOut, summary="Eliminar nota")
def delete_note(
    note_id: str,
    identity: AuthContext = Depends(get_current_identity),
    db: Database = Depends(get_db),
) -> MessageOut:
    service.delete_note(db, identity.user_id, note_id)
    return MessageOut(message="Note deleted successfully")
