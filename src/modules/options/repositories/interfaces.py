"""Option repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.options.models import Option


class IOptionRepository(IRepository["Option"]):
    @abstractmethod
    def get_by_name(self, name: str) -> Optional[Option]:
        """Retrieve an option by its exact name."""
