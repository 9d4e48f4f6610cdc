"""Order, OrderProduct and OrderOption models.

Business rules live in ``modules.orders.engine``; these models only store
orders the engine admitted.

- Line references (``room_id``, ``product_id``, ``option_id``) are plain
  UUID columns, not foreign keys: referential checks belong to the engine
  and catalog deletions never cascade into orders.
- Lines keep an explicit ``position`` so their order round-trips.
- ``has_options`` distinguishes "no option list" from an empty one.
- ``validated_at`` / ``validation_token`` record the admission that
  produced the stored state.
- Deleting an order removes its lines (CASCADE).
"""

from __future__ import annotations

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel


class Order(BaseModel):
    requested_delivery_date = models.DateField()
    room_id = models.UUIDField(db_index=True)
    has_options = models.BooleanField(default=False)
    validated_at = models.DateTimeField()
    validation_token = models.CharField(max_length=64, blank=True, default="")

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(
                fields=["-requested_delivery_date"], name="orders_delivery_date_idx"
            ),
        ]

    def __str__(self) -> str:
        return f"Order {self.id} ({self.requested_delivery_date})"


class OrderProduct(BaseModel):
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="product_lines",
    )
    position = models.PositiveSmallIntegerField()
    product_id = models.UUIDField()
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        db_table = "order_products"
        ordering = ["position"]

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity}"


class OrderOption(BaseModel):
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="option_lines",
    )
    position = models.PositiveSmallIntegerField()
    option_id = models.UUIDField()
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])

    class Meta:
        db_table = "order_options"
        ordering = ["position"]

    def __str__(self) -> str:
        return f"{self.option_id} x{self.quantity}"
