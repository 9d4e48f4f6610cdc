"""Room service layer (Use Cases).

Business rules enforced here:
- Room names are unique.
- Deletion requires an explicit boolean confirmation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import require_confirmation
from modules.rooms.exceptions import RoomAlreadyExists, RoomNotFound
from modules.rooms.models import Room

if TYPE_CHECKING:
    from modules.rooms.dtos import CreateRoomDTO, UpdateRoomDTO
    from modules.rooms.repositories.interfaces import IRoomRepository

logger = structlog.get_logger(__name__)


class RoomService:
    """Application service for Room use-cases."""

    def __init__(self, repository: IRoomRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def create_room(self, dto: CreateRoomDTO) -> Room:
        """Raises ``RoomAlreadyExists`` if the name is taken."""
        if self._repo.get_by_name(dto.name):
            logger.warning("room.duplicate_name", name=dto.name)
            raise RoomAlreadyExists(f"Room '{dto.name}' already exists.")

        room = self._repo.save(
            Room(name=dto.name, description=dto.description, number=dto.number)
        )
        logger.info("room.created", room_id=str(room.id))
        return room

    @transaction.atomic
    def update_room(self, id: str, dto: UpdateRoomDTO) -> Room:
        room = self.get_room(id)

        if dto.name is not None and dto.name != room.name:
            if self._repo.get_by_name(dto.name):
                raise RoomAlreadyExists(f"Room '{dto.name}' already exists.")
            room.name = dto.name
        if dto.description is not None:
            room.description = dto.description
        if dto.number is not None:
            room.number = dto.number

        room = self._repo.save(room)
        logger.info("room.updated", room_id=str(id))
        return room

    def get_room(self, id: str) -> Room:
        room = self._repo.get_by_id(id)
        if not room:
            raise RoomNotFound(f"Room {id} not found.")
        return room

    def list_rooms(self, filters: Optional[Dict[str, Any]] = None) -> List[Room]:
        return self._repo.list(filters)

    def delete_room(self, id: str, confirm: Any) -> None:
        """Delete a room.

        Raises:
            ConfirmationRequired: *confirm* is not the boolean ``True``.
            RoomNotFound: the room does not exist.
        """
        require_confirmation(confirm)
        with transaction.atomic():
            if not self._repo.delete(id):
                raise RoomNotFound(f"Room {id} not found.")
        logger.info("room.deleted", room_id=str(id))
