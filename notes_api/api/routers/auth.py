"""Rutas de cuenta: alta, login y usuario actual."""
from fastapi import APIRouter, Depends, status
from pymongo.database import Database

from notes_api.api.deps import AuthContext, get_current_identity, get_db, get_settings
from notes_api.api.schemas.auth import AuthOut, CreateAccountPayload, LoginPayload, UserOut
from notes_api.core.config import Settings
from notes_api.services import auth_service as service

router = APIRouter(tags=["Auth"])


@router.post(
    "/create-account",
    response_model=AuthOut,
    status_code=status.HTTP_201_CREATED,
    summary="Crear cuenta",
    description="Registra usuario (fullName, email, password) y devuelve access token.",
)
def create_account(
    payload: CreateAccountPayload,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    res = service.create_account(db, settings, payload)
    return AuthOut(message="Account created successfully", access_token=res["access_token"], user=res["user"])


@router.post(
    "/login",
    response_model=AuthOut,
    summary="Login",
    description="Valida email y password y emite un access token nuevo.",
)
def login(
    payload: LoginPayload,
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    res = service.login(db, settings, payload)
    return AuthOut(message="Login successful", access_token=res["access_token"], user=res["user"])


@router.get(
    "/get-user",
    response_model=UserOut,
    summary="Usuario actual",
    description="Devuelve información básica del usuario autenticado.",
)
def get_user(
    identity: AuthContext = Depends(get_current_identity),
    db: Database = Depends(get_db),
):
    return UserOut(user=service.get_user(db, identity.user_id))
