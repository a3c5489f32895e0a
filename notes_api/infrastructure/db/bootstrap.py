"""
Bootstrap de la base Mongo: define y aplica validadores (JSON Schema) e índices.
Se ejecuta al inicio de la app para asegurar colecciones mínimas y consistencia.
No tumba la app si algo falla; deja warnings en casos no críticos.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from notes_api.repositories.note_repo import COLLECTION as NOTE_COLL
from notes_api.repositories.user_repo import COLLECTION as USER_COLL

_log = logging.getLogger("notes.mongo.bootstrap")


USER_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["full_name", "email", "password_hash", "created_at", "updated_at"],
    "properties": {
        "full_name": {"bsonType": "string", "minLength": 1},
        "email": {"bsonType": "string", "minLength": 3, "description": "lowercase"},
        "password_hash": {"bsonType": "string"},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}

NOTE_VALIDATOR: Dict[str, Any] = {
    "bsonType": "object",
    "required": ["title", "content", "tags", "is_pinned", "user_id", "created_at", "updated_at"],
    "properties": {
        "title": {"bsonType": "string", "minLength": 1},
        "content": {"bsonType": "string", "minLength": 1},
        "tags": {"bsonType": "array", "items": {"bsonType": "string"}},
        "is_pinned": {"bsonType": "bool"},
        "user_id": {"bsonType": "string"},
        "created_at": {"bsonType": "string", "minLength": 10},
        "updated_at": {"bsonType": "string", "minLength": 10},
    },
    "additionalProperties": True,
}


def _collmod_or_create(db: Database, name: str, validator: Dict[str, Any]) -> None:
    try:
        if name not in db.list_collection_names():
            db.create_collection(name, validator={"$jsonSchema": validator})
        else:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
    except PyMongoError as e:
        # Algunos motores no aceptan collMod sin privilegios; seguimos sin validator estricto.
        _log.warning("No se pudo aplicar validator en '%s': %s", name, e)


def _ensure_indexes(db: Database, name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = db[name]
    for ix in indexes:
        spec = dict(ix)
        keys = spec.pop("keys")
        try:
            coll.create_index(keys, **spec)
        except PyMongoError as e:
            # Ignora fallas de índice (e.g., datos no únicos previos)
            _log.warning("No se pudo crear índice en '%s' (%s): %s", name, keys, e)


def ensure_collections(db: Database) -> None:
    """
    Garantiza colecciones, validadores e índices mínimos.
    """
    _collmod_or_create(db, USER_COLL, USER_VALIDATOR)
    _ensure_indexes(db, USER_COLL, [
        {"keys": [("email", ASCENDING)], "unique": True, "name": "uniq_email"},
    ])

    _collmod_or_create(db, NOTE_COLL, NOTE_VALIDATOR)
    _ensure_indexes(db, NOTE_COLL, [
        {"keys": [("user_id", ASCENDING)], "name": "ix_user"},
        {"keys": [("user_id", ASCENDING), ("is_pinned", DESCENDING)], "name": "ix_user_pinned"},
    ])
    _log.info("Colecciones listas: %s, %s", USER_COLL, NOTE_COLL)
