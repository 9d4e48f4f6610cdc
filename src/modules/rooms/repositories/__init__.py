"""Room repositories package."""

from modules.rooms.repositories.django_repository import RoomDjangoRepository
from modules.rooms.repositories.interfaces import IRoomRepository

__all__ = ["IRoomRepository", "RoomDjangoRepository"]
