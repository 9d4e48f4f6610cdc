"""Django ORM implementation of the Room repository.

Look-ups follow the Null Object pattern: ``None`` for unknown or
malformed IDs, never an exception.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.repositories.errors import translate_store_errors
from modules.rooms.models import Room
from modules.rooms.repositories.interfaces import IRoomRepository

logger = structlog.get_logger(__name__)


class RoomDjangoRepository(IRoomRepository):
    """Concrete Room repository backed by Django ORM."""

    @translate_store_errors
    def get_by_id(self, id: str) -> Optional[Room]:
        try:
            return Room.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @translate_store_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Room]:
        queryset = Room.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @translate_store_errors
    @transaction.atomic
    def save(self, entity: Room) -> Room:
        entity.save()
        logger.info("room.saved", room_id=str(entity.id))
        return entity

    @translate_store_errors
    @transaction.atomic
    def delete(self, id: str) -> bool:
        room = self.get_by_id(id)
        if not room:
            return False
        room.delete()
        logger.info("room.deleted", room_id=str(id))
        return True

    @translate_store_errors
    def get_by_name(self, name: str) -> Optional[Room]:
        return Room.objects.filter(name=name.strip()).first()
