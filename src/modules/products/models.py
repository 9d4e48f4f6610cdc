"""Product model with stock, per-order cap and a daily ordering window.

Business rules implemented:
- Name must be unique in the catalog.
- Price must be greater than zero.
- ``availability`` cannot be negative; ``max_order_quantity`` is at least 1.
- ``order_window`` is a daily recurring ``[from, to]`` range (hour/minute)
  evaluated in the configured reference time zone.  Windows that wrap past
  midnight are rejected at input time.

Availability is read by the order engine but never decremented by it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

import structlog
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)

_HOUR = [MinValueValidator(0), MaxValueValidator(23)]
_MINUTE = [MinValueValidator(0), MaxValueValidator(59)]


class Product(BaseModel):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    availability = models.PositiveIntegerField(default=0)
    max_order_quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )
    order_window_from_hour = models.PositiveSmallIntegerField(
        default=0, validators=_HOUR
    )
    order_window_from_minute = models.PositiveSmallIntegerField(
        default=0, validators=_MINUTE
    )
    order_window_to_hour = models.PositiveSmallIntegerField(
        default=23, validators=_HOUR
    )
    order_window_to_minute = models.PositiveSmallIntegerField(
        default=59, validators=_MINUTE
    )

    class Meta:
        db_table = "products"
        ordering = ["created_at", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gt=0),
                name="products_price_positive",
            ),
            models.CheckConstraint(
                condition=models.Q(max_order_quantity__gte=1),
                name="products_max_order_quantity_positive",
            ),
        ]

    # ------------------------------------------------------------------
    # Order window
    # ------------------------------------------------------------------

    @property
    def order_window(self) -> Dict[str, Dict[str, int]]:
        """The window in its wire shape: ``{"from": {...}, "to": {...}}``."""
        return {
            "from": {
                "hour": self.order_window_from_hour,
                "minute": self.order_window_from_minute,
            },
            "to": {
                "hour": self.order_window_to_hour,
                "minute": self.order_window_to_minute,
            },
        }

    def set_order_window(
        self, from_hour: int, from_minute: int, to_hour: int, to_minute: int
    ) -> None:
        self.order_window_from_hour = from_hour
        self.order_window_from_minute = from_minute
        self.order_window_to_hour = to_hour
        self.order_window_to_minute = to_minute

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=str(self.id),
                name=self.name,
                availability=self.availability,
            )

    def __str__(self) -> str:
        return self.name
