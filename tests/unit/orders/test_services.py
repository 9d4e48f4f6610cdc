"""Unit tests for OrderService.

Covers:
- create_order: accepted, rejected, clock injection, store failures.
- update_order: merge + full re-validation, not found, rejected.
- delete_order: strict confirmation, not found.
- get_order / list_orders: delegation.
- Pre-commit re-check: disabled by default, rejects stale admissions.
- The stock race: concurrent admissions are not serialized.
"""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from django.test import override_settings

from modules.core.exceptions import ConfirmationRequired, StoreUnavailable
from modules.options.models import Option
from modules.orders.catalog import DjangoCatalogStore
from modules.orders.constants import ViolationKind
from modules.orders.dtos import UpdateOrderDTO
from modules.orders.engine import OrderAdmissibilityEngine, ValidatedOrder
from modules.orders.exceptions import OrderNotFound, OrderValidationFailed
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService, build_engine
from modules.products.models import Product
from modules.rooms.models import Room

from tests.unit.orders.helpers import (
    NOW,
    OPTION_ID,
    PRODUCT_ID,
    ROOM_ID,
    TODAY,
    draft,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _product(availability=10, max_order_quantity=5, window=(8, 0, 10, 0)):
    product = Product(
        id=PRODUCT_ID,
        name="Frokost",
        price=Decimal("100.00"),
        availability=availability,
        max_order_quantity=max_order_quantity,
    )
    product.set_order_window(*window)
    return product


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def catalog():
    store = MagicMock()
    store.find_room.return_value = Room(id=ROOM_ID, name="Lokale 1")
    store.find_product.return_value = _product()
    store.find_option.return_value = Option(
        id=OPTION_ID, name="Projektor", availability=3, max_order_quantity=2
    )
    return store


@pytest.fixture()
def service(mock_repo, catalog):
    return OrderService(
        order_repository=mock_repo,
        catalog_store=catalog,
        engine=OrderAdmissibilityEngine(),
        clock=lambda: NOW,
        recheck_before_commit=False,
    )


def _stored_order(quantity=2, options=None):
    order = MagicMock()
    order.id = "order-1"
    order.requested_delivery_date = TODAY
    order.room_id = ROOM_ID
    order.product_lines.all.return_value = [
        SimpleNamespace(product_id=PRODUCT_ID, quantity=quantity)
    ]
    order.option_lines.all.return_value = options or []
    order.has_options = options is not None
    return order


# ===========================================================================
# create_order
# ===========================================================================


class TestCreateOrder:
    def test_accepted_order_is_persisted(self, service, mock_repo):
        mock_repo.create.side_effect = lambda validated: _stored_order()

        order = service.create_order(draft())

        mock_repo.create.assert_called_once()
        validated = mock_repo.create.call_args.args[0]
        assert isinstance(validated, ValidatedOrder)
        assert validated.delivery_date == TODAY
        assert validated.validated_at == NOW
        assert order.room_id == ROOM_ID

    def test_rejected_order_is_not_persisted(self, service, mock_repo):
        with pytest.raises(OrderValidationFailed) as exc_info:
            service.create_order(draft(room_id=None, products=[]))

        assert [v.kind for v in exc_info.value.violations] == [
            ViolationKind.ROOM_REQUIRED,
            ViolationKind.PRODUCTS_EMPTY,
        ]
        mock_repo.create.assert_not_called()

    def test_uses_injected_clock(self, mock_repo, catalog):
        late = NOW.replace(hour=11)
        service = OrderService(
            order_repository=mock_repo,
            catalog_store=catalog,
            engine=OrderAdmissibilityEngine(),
            clock=lambda: late,
            recheck_before_commit=False,
        )

        with pytest.raises(OrderValidationFailed) as exc_info:
            service.create_order(draft())

        assert [v.kind for v in exc_info.value.violations] == [
            ViolationKind.PRODUCT_OUTSIDE_ORDER_WINDOW
        ]

    def test_unknown_room_reported(self, service, catalog, mock_repo):
        catalog.find_room.return_value = None

        with pytest.raises(OrderValidationFailed) as exc_info:
            service.create_order(draft())

        assert exc_info.value.violations[0].field == "room_id"
        mock_repo.create.assert_not_called()

    def test_catalog_read_once_per_referenced_entry(self, service, catalog, mock_repo):
        mock_repo.create.side_effect = lambda validated: _stored_order()

        service.create_order(draft(options=[{"option_id": OPTION_ID, "quantity": 1}]))

        catalog.find_room.assert_called_once_with(ROOM_ID)
        catalog.find_product.assert_called_once_with(PRODUCT_ID)
        catalog.find_option.assert_called_once_with(OPTION_ID)

    def test_store_unavailable_propagates(self, service, catalog, mock_repo):
        catalog.find_product.side_effect = StoreUnavailable("down")

        with pytest.raises(StoreUnavailable):
            service.create_order(draft())
        mock_repo.create.assert_not_called()


# ===========================================================================
# update_order
# ===========================================================================


class TestUpdateOrder:
    def test_patch_is_merged_and_revalidated(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _stored_order(quantity=2)
        mock_repo.update.side_effect = lambda id, validated: _stored_order(3)

        patch = UpdateOrderDTO.model_validate(
            {"products": [{"product_id": str(PRODUCT_ID), "quantity": 3}]}
        )
        service.update_order("order-1", patch)

        id_arg, validated = mock_repo.update.call_args.args
        assert id_arg == "order-1"
        assert validated.draft.products[0].quantity == 3
        assert validated.draft.room_id == ROOM_ID
        assert validated.draft.options is None

    def test_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None

        with pytest.raises(OrderNotFound):
            service.update_order("missing", UpdateOrderDTO())
        mock_repo.update.assert_not_called()

    def test_merged_order_breaking_rules_is_rejected(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _stored_order()
        patch = UpdateOrderDTO.model_validate(
            {"products": [{"product_id": str(PRODUCT_ID), "quantity": 99}]}
        )

        with pytest.raises(OrderValidationFailed) as exc_info:
            service.update_order("order-1", patch)

        assert [v.kind for v in exc_info.value.violations] == [
            ViolationKind.PRODUCT_QUANTITY_EXCEEDS_AVAILABILITY,
            ViolationKind.PRODUCT_QUANTITY_EXCEEDS_MAX,
        ]
        mock_repo.update.assert_not_called()

    def test_unchanged_fields_are_revalidated_too(self, service, mock_repo, catalog):
        # The stored product was deleted from the catalog after admission.
        mock_repo.get_by_id.return_value = _stored_order()
        catalog.find_product.return_value = None

        with pytest.raises(OrderValidationFailed) as exc_info:
            service.update_order("order-1", UpdateOrderDTO())

        assert exc_info.value.violations[0].kind == ViolationKind.PRODUCT_NOT_FOUND

    def test_order_deleted_before_write(self, service, mock_repo):
        mock_repo.get_by_id.return_value = _stored_order()
        mock_repo.update.return_value = None

        with pytest.raises(OrderNotFound):
            service.update_order("order-1", UpdateOrderDTO())


# ===========================================================================
# delete_order / queries
# ===========================================================================


class TestDeleteOrder:
    def test_success(self, service, mock_repo):
        mock_repo.delete.return_value = True
        service.delete_order("order-1", True)
        mock_repo.delete.assert_called_once_with("order-1")

    @pytest.mark.parametrize("confirm", [False, None, "true", 1])
    def test_requires_boolean_true_before_touching_store(
        self, service, mock_repo, confirm
    ):
        with pytest.raises(ConfirmationRequired):
            service.delete_order("order-1", confirm)
        mock_repo.delete.assert_not_called()

    def test_no_transaction_opened_without_confirmation(self, service, mock_repo):
        with patch("modules.orders.services.transaction") as tx:
            with pytest.raises(ConfirmationRequired):
                service.delete_order("order-1", "true")
        tx.atomic.assert_not_called()

    def test_not_found(self, service, mock_repo):
        mock_repo.delete.return_value = False
        with pytest.raises(OrderNotFound):
            service.delete_order("missing", True)


class TestQueries:
    def test_get_order(self, service, mock_repo):
        stored = _stored_order()
        mock_repo.get_by_id.return_value = stored
        assert service.get_order("order-1") is stored

    def test_get_order_not_found(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        with pytest.raises(OrderNotFound):
            service.get_order("missing")

    def test_list_orders_delegates(self, service, mock_repo):
        mock_repo.list.return_value = []
        assert service.list_orders({"room_id": ROOM_ID}) == []
        mock_repo.list.assert_called_once_with({"room_id": ROOM_ID})


# ===========================================================================
# Configuration
# ===========================================================================


class TestBuildEngine:
    @override_settings(
        ORDER_REFERENCE_TIME_ZONE="Europe/Copenhagen", ORDER_MESSAGE_LANGUAGE="en"
    )
    def test_reads_settings(self):
        engine = build_engine()
        assert str(engine.tz) == "Europe/Copenhagen"

        result = engine.evaluate(draft(room_id=None), _empty_snapshot(), NOW)
        assert result.violations[0].message == "Room is required."

    @override_settings(ORDER_RECHECK_BEFORE_COMMIT=True)
    def test_recheck_enabled_from_settings(self, mock_repo, catalog):
        catalog.find_product.side_effect = [_product(), _product(availability=1)]
        service = OrderService(
            order_repository=mock_repo,
            catalog_store=catalog,
            engine=OrderAdmissibilityEngine(),
            clock=lambda: NOW,
        )

        with pytest.raises(OrderValidationFailed):
            service.create_order(draft())
        mock_repo.create.assert_not_called()


def _empty_snapshot():
    from modules.orders.engine import CatalogSnapshot

    return CatalogSnapshot()


# ===========================================================================
# Stock race and pre-commit re-check (database-backed)
# ===========================================================================


class _StockChangingCatalog(DjangoCatalogStore):
    """Lowers a product's availability right after the first read of it,
    as a concurrent writer would."""

    def __init__(self, product_id, new_availability):
        super().__init__()
        self._product_id = product_id
        self._new_availability = new_availability
        self._fired = False

    def find_product(self, id):
        product = super().find_product(id)
        if not self._fired:
            self._fired = True
            Product.objects.filter(id=self._product_id).update(
                availability=self._new_availability
            )
        return product


@pytest.fixture()
def room(make_room):
    return make_room()


@pytest.fixture()
def product(make_product):
    return make_product(availability=4, max_order_quantity=5)


def _db_draft(room, product, quantity=3):
    return draft(
        room_id=room.id,
        products=[{"product_id": product.id, "quantity": quantity}],
    )


class TestStockRace:
    def test_both_orders_admitted_against_same_stock(self, room, product):
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            catalog_store=DjangoCatalogStore(),
            engine=OrderAdmissibilityEngine(),
            clock=lambda: NOW,
        )

        first = service.create_order(_db_draft(room, product))
        second = service.create_order(_db_draft(room, product))

        assert first.id != second.id
        assert Order.objects.count() == 2
        product.refresh_from_db()
        assert product.availability == 4

    def test_stale_admission_stored_without_recheck(self, room, product):
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            catalog_store=_StockChangingCatalog(product.id, new_availability=1),
            engine=OrderAdmissibilityEngine(),
            clock=lambda: NOW,
            recheck_before_commit=False,
        )

        service.create_order(_db_draft(room, product))

        assert Order.objects.count() == 1

    def test_recheck_rejects_stale_admission(self, room, product):
        service = OrderService(
            order_repository=OrderDjangoRepository(),
            catalog_store=_StockChangingCatalog(product.id, new_availability=1),
            engine=OrderAdmissibilityEngine(),
            clock=lambda: NOW,
            recheck_before_commit=True,
        )

        with pytest.raises(OrderValidationFailed) as exc_info:
            service.create_order(_db_draft(room, product))

        assert exc_info.value.violations[0].kind == (
            ViolationKind.PRODUCT_QUANTITY_EXCEEDS_AVAILABILITY
        )
        assert Order.objects.count() == 0
