"""
Esquemas Pydantic para alta de cuenta y login.

- Nombres de campo en camelCase hacia afuera (compatibles con el cliente web),
  snake_case internamente vía alias.
- El email se normaliza a minúsculas.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator


class CreateAccountPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(default=None, alias="fullName")
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else v

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: Optional[EmailStr]) -> Optional[str]:
        return str(v).lower() if v is not None else v

    @model_validator(mode="before")
    @classmethod
    def _blank_email_is_missing(cls, data):
        # "" no debe llegar al validador de EmailStr: se reporta como faltante
        if isinstance(data, dict) and data.get("email") == "":
            data = {**data, "email": None}
        return data

    @model_validator(mode="after")
    def _require_fields(self):
        if not self.full_name or not self.email or not self.password:
            raise ValueError("Please provide all required fields: fullName, email, and password")
        return self


class LoginPayload(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email")
    @classmethod
    def _lower_email(cls, v: Optional[str]) -> Optional[str]:
        return v.strip().lower() if v is not None else v

    @model_validator(mode="after")
    def _require_fields(self):
        if not self.email or not self.password:
            raise ValueError("Please provide both email and password")
        return self


class UserPublic(BaseModel):
    """Vista pública del usuario (sin secretos)."""
    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="fullName")
    email: str


class UserDetail(UserPublic):
    id: str = Field(alias="_id")
    created_on: Optional[str] = Field(default=None, alias="createdOn")


class AuthOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    error: bool = False
    message: str
    access_token: str = Field(alias="accessToken")
    user: UserPublic


class UserOut(BaseModel):
    error: bool = False
    user: UserDetail
