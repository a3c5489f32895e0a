"""
Creación y verificación de access tokens (JWT HS256).

Payload: {"userId": <id>, "iat": <epoch>, "exp": <epoch>}.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

# Asegura que usamos PyJWT (no el paquete "jwt" incorrecto)
try:
    import jwt as pyjwt  # PyJWT expone jwt.encode/jwt.decode
    if not hasattr(pyjwt, "encode"):
        raise ImportError("Paquete 'jwt' incorrecto en el entorno")
except Exception as e:
    raise RuntimeError(
        "Conflicto de librerías JWT: instala PyJWT>=2 y desinstala el paquete 'jwt'. "
        "Ejecuta: pip uninstall jwt && pip install PyJWT"
    ) from e

from notes_api.core.config import Settings

InvalidTokenError = pyjwt.InvalidTokenError


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


def _secret(settings: Settings) -> str:
    if not settings.jwt_secret:
        raise RuntimeError("JWT_SECRET no configurado")
    return settings.jwt_secret


def create_access_token(*, user_id: str, settings: Settings) -> str:
    """
    Genera un JWT válido por `access_token_expire_minutes`.
    Claims: userId, iat, exp.
    """
    now = _now_utc()
    exp = now + timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "userId": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return pyjwt.encode(payload, _secret(settings), algorithm=settings.jwt_algorithm)


def verify_access_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Decodifica y valida firma/expiración. Devuelve payload.
    Lanza `InvalidTokenError` (o subclase) si algo no cuadra.
    """
    payload = pyjwt.decode(
        token,
        key=_secret(settings),
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "iat"]},
    )
    if not payload.get("userId"):
        raise pyjwt.InvalidTokenError("Token sin userId")
    return payload
