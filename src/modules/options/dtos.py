"""Option DTOs for the Service Layer (Pydantic v2, immutable)."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Name must not be empty.")
    return v.strip()


class CreateOptionDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    price: Decimal = Field(default=Decimal("0.00"), ge=0)
    availability: int = Field(default=0, ge=0)
    max_order_quantity: int = Field(default=1, ge=1)

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return _clean_name(v)


class UpdateOptionDTO(BaseModel):
    """All fields optional; only supplied fields will be updated."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    availability: int | None = Field(default=None, ge=0)
    max_order_quantity: int | None = Field(default=None, ge=1)

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        return v if v is None else _clean_name(v)
