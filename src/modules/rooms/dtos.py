"""Room DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_required(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Name must not be empty.")
    return v.strip()


class CreateRoomDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    number: int | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return _strip_required(v)


class UpdateRoomDTO(BaseModel):
    """Partial update: only supplied (non-``None``) fields are applied."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str | None = None
    number: int | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _strip_required(v)
