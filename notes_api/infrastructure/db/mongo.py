"""Cliente MongoDB (pymongo) construido a partir de Settings.

El cliente se crea una sola vez en el startup y vive en `app.state`;
los repositorios reciben la `Database` ya resuelta.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from notes_api.core.config import Settings

_log = logging.getLogger("notes.mongo")


def build_client(settings: Settings) -> MongoClient:
    uri = settings.mongo_uri
    kwargs = dict(serverSelectionTimeoutMS=settings.mongo_timeout_ms)
    if uri.startswith("mongodb+srv://"):
        # SRV ya implica TLS; proveemos CA bundle para robustez
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        kwargs["tlsAllowInvalidCertificates"] = settings.mongo_tls_insecure
        kwargs["tlsAllowInvalidHostnames"] = settings.mongo_tls_allow_invalid_hostnames
    return MongoClient(uri, **kwargs)


def init_mongo(settings: Settings) -> Tuple[Optional[MongoClient], Optional[Database]]:
    """
    Inicializa el cliente y valida conexión (ping).
    No tumba la app: si Mongo no responde devuelve (None, None) y loggea.
    """
    try:
        client = build_client(settings)
        client.admin.command("ping")
        _log.info("Mongo conectado (db=%s)", settings.mongo_db)
        return client, client[settings.mongo_db]
    except PyMongoError as e:
        _log.warning("Mongo no accesible: %s", e)
        return None, None


def close_mongo(client: Optional[MongoClient]) -> None:
    if client is not None:
        client.close()
        _log.info("Mongo desconectado")
