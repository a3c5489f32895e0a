"""
Dependencias reutilizables para routers (FastAPI Depends).

- Settings y DB salen de `app.state` (creados en `create_app`/startup).
- Autenticación: valida el Bearer token y entrega un `AuthContext` explícito.
- Mantener esta capa delgada: sin lógica de negocio.
"""
from typing import Optional

from fastapi import Depends, Header, Request
from pydantic import BaseModel, ConfigDict
from pymongo.database import Database

from notes_api.core.config import Settings
from notes_api.core.exceptions import ForbiddenError, UnauthenticatedError
from notes_api.services.token_service import InvalidTokenError, verify_access_token


class AuthContext(BaseModel):
    """Identidad autenticada de la petición en curso."""
    model_config = ConfigDict(frozen=True)

    user_id: str


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Database:
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Mongo no inicializado. Intenta más tarde.")
    return db


def get_current_identity(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> AuthContext:
    # "Bearer <token>": sin header o sin token -> 401; token que no valida -> 403
    token = (authorization or "").strip().partition(" ")[2].strip()
    if not token:
        raise UnauthenticatedError()
    try:
        payload = verify_access_token(token, settings)
    except InvalidTokenError:
        raise ForbiddenError()
    return AuthContext(user_id=str(payload["userId"]))
