"""Room repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.rooms.models import Room


class IRoomRepository(IRepository["Room"]):
    """Repository contract for rooms."""

    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Room]:
        """Retrieve a room by its exact name."""
