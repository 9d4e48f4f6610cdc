"""Order DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

The draft DTOs deliberately accept values the admissibility engine will
reject (missing fields, empty product lists, fractional or negative
quantities, duplicate lines): those are business-rule violations that
must be reported together, not parse errors.  Only values that cannot be
represented at all (a malformed UUID, a non-numeric quantity) fail here.

- ``ProductLineDTO`` / ``OptionLineDTO``: one order line.
- ``OrderDraftDTO``: a candidate order, as submitted or as merged for an
  update.
- ``UpdateOrderDTO``: a partial patch; only fields that were sent count.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from modules.orders.models import Order

Quantity = Union[int, float]
DeliveryDate = Union[datetime, date]


class ProductLineDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: Optional[UUID] = None
    quantity: Optional[Quantity] = None


class OptionLineDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    option_id: Optional[UUID] = None
    quantity: Optional[Quantity] = None


class OrderDraftDTO(BaseModel):
    """Unvalidated candidate order.

    ``options`` is ``None`` when the order carries no option list at all,
    which is distinct from an empty list only in what gets stored.
    """

    model_config = ConfigDict(frozen=True)

    requested_delivery_date: Optional[DeliveryDate] = None
    room_id: Optional[UUID] = None
    products: Optional[List[ProductLineDTO]] = None
    options: Optional[List[OptionLineDTO]] = None

    @classmethod
    def from_entity(cls, order: Order) -> OrderDraftDTO:
        """Rebuild the draft an existing order was admitted from.

        Assumes ``product_lines`` and ``option_lines`` are prefetched.
        """
        option_lines = list(order.option_lines.all())
        return cls(
            requested_delivery_date=order.requested_delivery_date,
            room_id=order.room_id,
            products=[
                ProductLineDTO(product_id=line.product_id, quantity=line.quantity)
                for line in order.product_lines.all()
            ],
            options=(
                [
                    OptionLineDTO(option_id=line.option_id, quantity=line.quantity)
                    for line in option_lines
                ]
                if order.has_options
                else None
            ),
        )

    def merge(self, patch: UpdateOrderDTO) -> OrderDraftDTO:
        """Return a new draft with the patch's explicitly-set fields applied."""
        return OrderDraftDTO.model_validate(
            {**self.model_dump(), **patch.model_dump(exclude_unset=True)}
        )


class UpdateOrderDTO(BaseModel):
    """Partial order patch.

    Fields left out of the request stay unset (``exclude_unset``), so an
    explicit ``"options": null`` removes the option list while omitting
    ``options`` keeps it.
    """

    model_config = ConfigDict(frozen=True)

    requested_delivery_date: Optional[DeliveryDate] = None
    room_id: Optional[UUID] = None
    products: Optional[List[ProductLineDTO]] = None
    options: Optional[List[OptionLineDTO]] = None

    @property
    def changed_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)
