"""Persistencia de usuarios (colección `user`)."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.database import Database

COLLECTION = "user"


def _now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def find_user_by_email(db: Database, email: str) -> Optional[Dict[str, Any]]:
    """Busca usuario por email (email en minúsculas)."""
    return db[COLLECTION].find_one({"email": email})


def get_user_by_id(db: Database, user_id: str) -> Optional[Dict[str, Any]]:
    """Obtiene usuario por id (str); ids malformados devuelven None."""
    try:
        oid = ObjectId(str(user_id))
    except (InvalidId, TypeError):
        return None
    return db[COLLECTION].find_one({"_id": oid})


def insert_user(db: Database, doc: Dict[str, Any]) -> str:
    """Inserta usuario con timestamps y devuelve id (str).

    Lanza `DuplicateKeyError` si el índice único de email lo rechaza.
    """
    data = dict(doc)
    now = _now_iso()
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = db[COLLECTION].insert_one(data)
    return str(res.inserted_id)
