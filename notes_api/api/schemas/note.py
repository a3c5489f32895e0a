"""
Esquemas Pydantic para `note`.

Entrada en camelCase (`isPinned`) como la espera el cliente web; los
documentos Mongo usan snake_case (`is_pinned`, `user_id`).
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _normalize_tags(v: Any) -> Any:
    if isinstance(v, str):
        v = [v]
    if v is not None and not isinstance(v, (list, tuple, set)):
        # Deja que la validación de tipo de pydantic lo rechace
        return v
    if any(not isinstance(t, str) for t in (v or [])):
        # Elementos no string: que los rechace la validación List[str]
        return v
    uniq = []
    seen = set()
    for t in (v or []):
        tt = t.strip().lower()
        if tt and tt not in seen:
            seen.add(tt)
            uniq.append(tt)
    return uniq


class NoteCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    content: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    is_pinned: bool = Field(default=False, alias="isPinned")

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v):
        return _normalize_tags(v)

    @model_validator(mode="after")
    def _require_fields(self):
        if not self.title or not self.title.strip():
            raise ValueError("Title is required")
        if not self.content or not self.content.strip():
            raise ValueError("Content is required")
        return self


class NoteUpdate(BaseModel):
    """Actualización parcial: solo viajan los campos presentes y no nulos."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    content: Optional[str] = None
    tags: Optional[List[str]] = None
    is_pinned: Optional[bool] = Field(default=None, alias="isPinned")

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, v):
        return None if v is None else _normalize_tags(v)

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, v: Optional[str], info):
        if v is not None and not v.strip():
            raise ValueError(f"{info.field_name.capitalize()} cannot be empty")
        return v

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class NoteOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    content: str
    tags: List[str]
    is_pinned: bool = Field(alias="isPinned")
    user_id: str = Field(alias="userId")
    created_on: Optional[str] = Field(default=None, alias="createdOn")
    updated_on: Optional[str] = Field(default=None, alias="updatedOn")

    @classmethod
    def from_doc(cls, doc: Dict[str, Any]) -> "NoteOut":
        return cls(
            id=str(doc["_id"]),
            title=doc["title"],
            content=doc["content"],
            tags=list(doc.get("tags") or []),
            is_pinned=bool(doc.get("is_pinned")),
            user_id=str(doc["user_id"]),
            created_on=doc.get("created_at"),
            updated_on=doc.get("updated_at"),
        )


class NoteCreateResponse(BaseModel):
    error: bool = False
    message: str
    note: NoteOut


class NoteDetailOut(BaseModel):
    error: bool = False
    note: NoteOut


class NoteListOut(BaseModel):
    error: bool = False
    message: str
    notes: List[NoteOut]


class MessageOut(BaseModel):
    error: bool = False
    message: str
