"""Repo de la colección `note`. Todas las consultas van filtradas por (id, dueño)."""
from typing import Dict, Any, List, Optional
from datetime import datetime, timezone

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ReturnDocument
from pymongo.database import Database

COLLECTION = "note"


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _oid(note_id: str) -> Optional[ObjectId]:
    """Convierte a ObjectId; ids malformados se tratan como inexistentes."""
    try:
        return ObjectId(str(note_id))
    except (InvalidId, TypeError):
        return None


def _owned(note_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    oid = _oid(note_id)
    if oid is None:
        return None
    return {"_id": oid, "user_id": str(user_id)}


def insert_note(db: Database, doc: Dict[str, Any]) -> Dict[str, Any]:
    """Inserta nota con defaults y devuelve el documento guardado (con `_id`)."""
    data = dict(doc)
    now = _now_iso()
    data["user_id"] = str(data["user_id"])
    data.setdefault("tags", [])
    data.setdefault("is_pinned", False)
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = db[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return data


def get_note(db: Database, note_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    filtro = _owned(note_id, user_id)
    if filtro is None:
        return None
    return db[COLLECTION].find_one(filtro)


def list_notes(db: Database, user_id: str) -> List[Dict[str, Any]]:
    """Notas del usuario en el orden natural que devuelve Mongo."""
    return list(db[COLLECTION].find({"user_id": str(user_id)}))


def update_note(db: Database, note_id: str, user_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Aplica `$set` solo si la nota pertenece al usuario; devuelve la versión nueva o None."""
    filtro = _owned(note_id, user_id)
    if filtro is None:
        return None
    data = dict(changes)
    data["updated_at"] = _now_iso()
    return db[COLLECTION].find_one_and_update(
        filtro,
        {"$set": data},
        return_document=ReturnDocument.AFTER,
    )


def delete_note(db: Database, note_id: str, user_id: str) -> bool:
    filtro = _owned(note_id, user_id)
    if filtro is None:
        return False
    res = db[COLLECTION].delete_one(filtro)
    return res.deleted_count > 0
