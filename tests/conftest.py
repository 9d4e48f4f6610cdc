from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.options.models import Option
from modules.products.models import Product
from modules.rooms.models import Room


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def api_client_with_correlation(api_client):
    """APIClient pre-configured with a known correlation ID header."""
    cid = "test-correlation-id-fixture"
    api_client.defaults["HTTP_X_REQUEST_ID"] = cid
    return api_client, cid


@pytest.fixture()
def make_room():
    def _make(name="Mødelokale 1", **overrides) -> Room:
        room = Room(name=name, **overrides)
        room.save()
        return room

    return _make


@pytest.fixture()
def make_product():
    """Persisted product; the default window is 08:00-10:00."""

    def _make(
        name="Frokost",
        window=(8, 0, 10, 0),
        availability=100,
        max_order_quantity=10,
        **overrides,
    ) -> Product:
        defaults = {"price": Decimal("125.00"), "description": ""}
        defaults.update(overrides)
        product = Product(
            name=name,
            availability=availability,
            max_order_quantity=max_order_quantity,
            **defaults,
        )
        product.set_order_window(*window)
        product.save()
        return product

    return _make


@pytest.fixture()
def make_option():
    def _make(name="Projektor", availability=5, max_order_quantity=2, **overrides):
        option = Option(
            name=name,
            availability=availability,
            max_order_quantity=max_order_quantity,
            **overrides,
        )
        option.save()
        return option

    return _make
