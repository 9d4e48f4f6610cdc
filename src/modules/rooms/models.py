"""Room model.

A room is the delivery target of an order.  It carries no business rules
beyond a required, unique ``name``; ``number`` is an optional room
number shown to staff.
"""

from __future__ import annotations

import structlog
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Room(BaseModel):
    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    number = models.PositiveIntegerField(null=True, blank=True, default=None)

    class Meta:
        db_table = "rooms"
        ordering = ["created_at", "id"]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        if self.name:
            self.name = self.name.strip()
        super().save(*args, **kwargs)
        if is_new:
            logger.info("room_created", room_id=str(self.id), name=self.name)

    def __str__(self) -> str:
        return self.name
