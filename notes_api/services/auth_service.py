"""
Lógica de cuentas: alta, login y perfil del usuario autenticado.

Contraseñas con argon2id (hash con sal, verificación en tiempo constante).
"""
import logging
from typing import Any, Dict

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type
from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from notes_api.api.schemas.auth import CreateAccountPayload, LoginPayload
from notes_api.core.config import Settings
from notes_api.core.exceptions import ConflictError, InvalidCredentialsError
from notes_api.repositories import user_repo as repo
from notes_api.services.token_service import create_access_token

_log = logging.getLogger("notes.auth")

ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return ph.verify(password_hash, password)
    except (VerificationError, InvalidHashError):
        return False


def public_user(u: Dict[str, Any]) -> Dict[str, Any]:
    return {"full_name": u.get("full_name") or "", "email": u.get("email")}


def create_account(db: Database, settings: Settings, payload: CreateAccountPayload) -> Dict[str, Any]:
    """
    Registra un usuario nuevo y emite su access token.
    Lanza ConflictError si el email ya existe (también si gana una carrera contra el índice único).
    """
    email = str(payload.email)
    if repo.find_user_by_email(db, email):
        raise ConflictError()

    # El token se emite antes de escribir: si falla no queda una cuenta sin credencial
    user_oid = ObjectId()
    access_token = create_access_token(user_id=str(user_oid), settings=settings)
    doc = {
        "_id": user_oid,
        "full_name": payload.full_name,
        "email": email,
        "password_hash": hash_password(payload.password),
    }
    try:
        user_id = repo.insert_user(db, doc)
    except DuplicateKeyError:
        raise ConflictError()

    _log.info("Cuenta creada user_id=%s", user_id)
    return {
        "access_token": access_token,
        "user": public_user(doc),
    }


def login(db: Database, settings: Settings, payload: LoginPayload) -> Dict[str, Any]:
    u = repo.find_user_by_email(db, payload.email)
    if not u or not u.get("password_hash") or not verify_password(payload.password, u["password_hash"]):
        raise InvalidCredentialsError()

    return {
        "access_token": create_access_token(user_id=str(u["_id"]), settings=settings),
        "user": public_user(u),
    }


def get_user(db: Database, user_id: str) -> Dict[str, Any]:
    """Perfil básico del usuario autenticado (sin secretos)."""
    u = repo.get_user_by_id(db, user_id)
    if not u:
        raise InvalidCredentialsError("User not found")
    out = public_user(u)
    out["id"] = str(u["_id"])
    out["created_on"] = u.get("created_at")
    return out
