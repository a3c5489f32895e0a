"""
Service layer for notes. Every call is scoped to the caller's user id;
a note owned by someone else behaves exactly like a missing one.
"""
import logging
from typing import Any, Dict, List

from pymongo.database import Database

from notes_api.api.schemas.note import NoteCreate, NoteUpdate
from notes_api.core.exceptions import BadRequestError, NotFoundError
from notes_api.repositories import note_repo as repo

_log = logging.getLogger("notes.notes")


def add_note(db: Database, user_id: str, payload: NoteCreate) -> Dict[str, Any]:
    doc = {
        "title": payload.title,
        "content": payload.content,
        "tags": payload.tags,
        "is_pinned": payload.is_pinned,
        "user_id": user_id,
    }
    saved = repo.insert_note(db, doc)
    _log.info("Nota creada note_id=%s user_id=%s", saved["_id"], user_id)
    return saved


def get_note(db: Database, user_id: str, note_id: str) -> Dict[str, Any]:
    note = repo.get_note(db, note_id, user_id)
    if not note:
        raise NotFoundError()
    return note


def edit_note(db: Database, user_id: str, note_id: str, payload: NoteUpdate) -> Dict[str, Any]:
    changes = payload.changes()
    if not changes:
        raise BadRequestError("No changes provided")
    note = repo.update_note(db, note_id, user_id, changes)
    if not note:
        raise NotFoundError()
    return note


def list_notes(db: Database, user_id: str) -> List[Dict[str, Any]]:
    """Pinned first; `sorted` is stable so store order holds inside each group."""
    notes = repo.list_notes(db, user_id)
    return sorted(notes, key=lambda n: not n.get("is_pinned", False))


def delete_note(db: Database, user_id: str, note_id: str) -> None:
    if not repo.delete_note(db, note_id, user_id):
        raise NotFoundError()
    _log.info("Nota eliminada note_id=%s user_id=%s", note_id, user_id)
