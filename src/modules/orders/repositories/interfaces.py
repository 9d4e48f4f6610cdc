"""Order repository interface.

Extends ``IRepository[Order]`` with the writes the Service Layer needs:
inserting and replacing an order from a ``ValidatedOrder``.  Each write
covers the order and its lines atomically.

The Service Layer depends exclusively on this contract (DIP).
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.engine import ValidatedOrder
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate (order + lines)."""

    @abstractmethod
    def create(self, validated: ValidatedOrder) -> Order:
        """Insert an admitted order with its product and option lines."""

    @abstractmethod
    def update(self, id: str, validated: ValidatedOrder) -> Optional[Order]:
        """Replace an order's fields and lines.  ``None`` if it is gone."""

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched lines."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders with optional filters."""
