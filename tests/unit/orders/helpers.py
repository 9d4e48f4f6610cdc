from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID

from modules.orders.dtos import OrderDraftDTO
from modules.orders.engine import (
    CatalogSnapshot,
    OptionSnapshot,
    OrderWindow,
    ProductSnapshot,
    RoomSnapshot,
    TimeOfDay,
)

NOW = datetime(2024, 5, 6, 9, 0, tzinfo=timezone.utc)
TODAY = date(2024, 5, 6)

ROOM_ID = UUID("01890000-0000-7000-8000-000000000001")
PRODUCT_ID = UUID("01890000-0000-7000-8000-000000000002")
OTHER_PRODUCT_ID = UUID("01890000-0000-7000-8000-000000000003")
OPTION_ID = UUID("01890000-0000-7000-8000-000000000004")


def product_snapshot(
    id=PRODUCT_ID,
    availability=10,
    max_order_quantity=5,
    window=(8, 0, 10, 0),
) -> ProductSnapshot:
    return ProductSnapshot(
        id=id,
        availability=availability,
        max_order_quantity=max_order_quantity,
        order_window=OrderWindow(
            TimeOfDay(window[0], window[1]), TimeOfDay(window[2], window[3])
        ),
    )


def option_snapshot(id=OPTION_ID, availability=3, max_order_quantity=2):
    return OptionSnapshot(
        id=id, availability=availability, max_order_quantity=max_order_quantity
    )


def snapshot(products=None, options=None, rooms=None) -> CatalogSnapshot:
    products = products if products is not None else [product_snapshot()]
    options = options if options is not None else [option_snapshot()]
    rooms = rooms if rooms is not None else [RoomSnapshot(ROOM_ID, "Lokale 1")]
    return CatalogSnapshot(
        rooms={r.id: r for r in rooms},
        products={p.id: p for p in products},
        options={o.id: o for o in options},
    )


def draft(**overrides) -> OrderDraftDTO:
    data = {
        "requested_delivery_date": TODAY,
        "room_id": ROOM_ID,
        "products": [{"product_id": PRODUCT_ID, "quantity": 2}],
    }
    data.update(overrides)
    return OrderDraftDTO.model_validate(data)
