"""
Errores de dominio y handlers globales para respuestas de error consistentes.

Los servicios lanzan subclases de `NotesError`; los routers no las atrapan.
Cuerpo de error: {"error": true, "message": ..., "request_id": ...}.
"""
import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class NotesError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(NotesError):
    status_code = 400
    default_message = "Bad request"


class UnauthenticatedError(NotesError):
    """No se envió credencial."""
    status_code = 401
    default_message = "Missing access token"


class ForbiddenError(NotesError):
    """Credencial inválida o expirada."""
    status_code = 403
    default_message = "Invalid or expired token"


class InvalidCredentialsError(NotesError):
    status_code = 401
    default_message = "Invalid email or password"


class ConflictError(NotesError):
    # El cliente web espera 400 para email duplicado
    status_code = 400
    default_message = "User with this email already exists"


class NotFoundError(NotesError):
    status_code = 404
    default_message = "Note not found"


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _error_body(request: Request, message: str) -> Dict[str, Any]:
    body: Dict[str, Any] = {"error": True, "message": message}
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def _validation_message(errors: List[Dict[str, Any]]) -> str:
    """Toma el mensaje del primer error; para ValueError propios usa el texto original."""
    if not errors:
        return "Invalid request body"
    first = errors[0]
    ctx_err = (first.get("ctx") or {}).get("error")
    if ctx_err is not None:
        return str(ctx_err)
    loc = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg") or "Invalid value"
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{loc}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("notes.errors")

    @app.exception_handler(NotesError)
    async def _notes_error_handler(request: Request, exc: NotesError):
        return JSONResponse(status_code=exc.status_code, content=_error_body(request, exc.message))

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, str(exc.detail or "HTTP error")),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        errors = list(exc.errors())
        body = _error_body(request, _validation_message(errors))
        # Versión compacta y serializable (ctx puede traer excepciones)
        body["errors"] = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]
        return JSONResponse(status_code=400, content=body)

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        # Se responde fuera de RequestIdMiddleware: el header se agrega aquí
        headers = {"X-Request-Id": rid} if rid else None
        return JSONResponse(status_code=500, content=_error_body(request, "Internal server error"), headers=headers)
