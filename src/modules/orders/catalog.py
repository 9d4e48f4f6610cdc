"""Catalog Store: read-only access to the entities an order references.

``ICatalogStore`` is the contract the order service consumes.
``DjangoCatalogStore`` delegates to the room, product and option
repositories, which already return ``None`` for unknown or malformed IDs.

``fetch_snapshot`` reads every entry a draft references, once, into an
immutable ``CatalogSnapshot`` for the engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Dict, Optional
from uuid import UUID

import structlog

from modules.options.repositories.django_repository import OptionDjangoRepository
from modules.orders.engine import (
    CatalogSnapshot,
    OptionSnapshot,
    ProductSnapshot,
    RoomSnapshot,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.rooms.repositories.django_repository import RoomDjangoRepository

if TYPE_CHECKING:
    from modules.options.models import Option
    from modules.options.repositories.interfaces import IOptionRepository
    from modules.orders.dtos import OrderDraftDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository
    from modules.rooms.models import Room
    from modules.rooms.repositories.interfaces import IRoomRepository

logger = structlog.get_logger(__name__)


class ICatalogStore(ABC):
    """Look-ups return ``None`` for absent entries rather than raising."""

    @abstractmethod
    def find_room(self, id: UUID) -> Optional[Room]: ...

    @abstractmethod
    def find_product(self, id: UUID) -> Optional[Product]: ...

    @abstractmethod
    def find_option(self, id: UUID) -> Optional[Option]: ...


class DjangoCatalogStore(ICatalogStore):
    def __init__(
        self,
        room_repository: Optional[IRoomRepository] = None,
        product_repository: Optional[IProductRepository] = None,
        option_repository: Optional[IOptionRepository] = None,
    ) -> None:
        self._rooms = room_repository or RoomDjangoRepository()
        self._products = product_repository or ProductDjangoRepository()
        self._options = option_repository or OptionDjangoRepository()

    def find_room(self, id: UUID) -> Optional[Room]:
        return self._rooms.get_by_id(str(id))

    def find_product(self, id: UUID) -> Optional[Product]:
        return self._products.get_by_id(str(id))

    def find_option(self, id: UUID) -> Optional[Option]:
        return self._options.get_by_id(str(id))


def fetch_snapshot(store: ICatalogStore, draft: OrderDraftDTO) -> CatalogSnapshot:
    """Read the room, products and options referenced by *draft*."""
    rooms: Dict[UUID, RoomSnapshot] = {}
    products: Dict[UUID, ProductSnapshot] = {}
    options: Dict[UUID, OptionSnapshot] = {}

    if draft.room_id is not None:
        room = store.find_room(draft.room_id)
        if room is not None:
            rooms[draft.room_id] = RoomSnapshot.from_entity(room)

    for line in draft.products or []:
        if line.product_id is None or line.product_id in products:
            continue
        product = store.find_product(line.product_id)
        if product is not None:
            products[line.product_id] = ProductSnapshot.from_entity(product)

    for line in draft.options or []:
        if line.option_id is None or line.option_id in options:
            continue
        option = store.find_option(line.option_id)
        if option is not None:
            options[line.option_id] = OptionSnapshot.from_entity(option)

    logger.debug(
        "catalog.snapshot_fetched",
        rooms=len(rooms),
        products=len(products),
        options=len(options),
    )
    return CatalogSnapshot(rooms=rooms, products=products, options=options)
