"""Schemas para endpoints de health (sin auth)."""
from pydantic import BaseModel


class HelloOut(BaseModel):
    data: str


class PingOut(BaseModel):
    message: str


class HealthOut(BaseModel):
    ok: bool
    db: bool
