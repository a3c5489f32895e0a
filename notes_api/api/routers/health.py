"""Health (sin auth), salidas tipadas y estables."""
from fastapi import APIRouter, Request, status

from notes_api.api.schemas.health import HealthOut, HelloOut, PingOut


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/", response_model=HelloOut, summary="Hello")
def hello() -> HelloOut:
    return HelloOut(data="hello")


@router.get("/ping", response_model=PingOut, summary="Ping básico")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Salud básica")
def health(request: Request) -> HealthOut:
    return HealthOut(ok=True, db=getattr(request.app.state, "db", None) is not None)
