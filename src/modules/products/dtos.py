"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (DRF Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``TimeOfDayDTO`` / ``OrderWindowDTO``: the daily ordering window.  The
  wire keys are ``from`` / ``to``; in Python they are ``start`` / ``end``.
- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class TimeOfDayDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)


class OrderWindowDTO(BaseModel):
    """Daily ordering window; ``start`` must not be later than ``end``."""

    model_config = ConfigDict(frozen=True)

    start: TimeOfDayDTO = Field(alias="from")
    end: TimeOfDayDTO = Field(alias="to")

    @model_validator(mode="after")
    def must_not_wrap_midnight(self):
        if (self.start.hour, self.start.minute) > (self.end.hour, self.end.minute):
            raise ValueError("Order window must not wrap past midnight.")
        return self


def _clean_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Name must not be empty.")
    return v.strip()


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests."""

    model_config = ConfigDict(frozen=True)

    name: str
    price: Decimal
    description: str = ""
    availability: int = Field(default=0, ge=0)
    max_order_quantity: int = Field(default=1, ge=1)
    order_window: OrderWindowDTO

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return _clean_name(v)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    All fields are optional; only supplied fields will be updated.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    price: Decimal | None = None
    description: str | None = None
    availability: int | None = Field(default=None, ge=0)
    max_order_quantity: int | None = Field(default=None, ge=1)
    order_window: OrderWindowDTO | None = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_blank(cls, v: str | None) -> str | None:
        return v if v is None else _clean_name(v)

    @field_validator("price")
    @classmethod
    def price_must_be_positive(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than zero.")
        return v
