"""Option model: an add-on ordered alongside products.

Business rules implemented:
- Name must be unique in the catalog.
- ``availability`` cannot be negative; ``max_order_quantity`` is at least 1.

Options have no ordering window.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Option(BaseModel):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    availability = models.PositiveIntegerField(default=0)
    max_order_quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)],
    )

    class Meta:
        db_table = "options"
        ordering = ["created_at", "id"]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)
        if is_new:
            logger.info("option_created", option_id=str(self.id), name=self.name)

    def __str__(self) -> str:
        return self.name
