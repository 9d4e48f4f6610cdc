"""Unit tests for OrderDjangoRepository (database-backed)."""

from __future__ import annotations

from unittest.mock import patch
from uuid import uuid4

import pytest
from django.db import OperationalError

from modules.core.exceptions import StoreUnavailable
from modules.orders.engine import ValidatedOrder
from modules.orders.models import Order, OrderOption, OrderProduct
from modules.orders.repositories.django_repository import OrderDjangoRepository

from tests.unit.orders.helpers import NOW, TODAY, draft

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return OrderDjangoRepository()


def _validated(order_draft, token="a" * 64) -> ValidatedOrder:
    return ValidatedOrder(
        draft=order_draft, delivery_date=TODAY, validated_at=NOW, token=token
    )


def _lines(count):
    return [{"product_id": uuid4(), "quantity": i + 1} for i in range(count)]


class TestCreate:
    def test_persists_order_and_lines_in_order(self, repo):
        products = _lines(3)
        option_id = uuid4()
        order = repo.create(
            _validated(
                draft(
                    products=products,
                    options=[{"option_id": option_id, "quantity": 2}],
                )
            )
        )

        assert Order.objects.count() == 1
        assert order.requested_delivery_date == TODAY
        assert order.validated_at == NOW
        assert order.validation_token == "a" * 64
        stored_products = [
            (p.product_id, p.quantity) for p in order.product_lines.all()
        ]
        stored_options = [(o.option_id, o.quantity) for o in order.option_lines.all()]
        assert stored_products == [(p["product_id"], p["quantity"]) for p in products]
        assert stored_options == [(option_id, 2)]
        assert order.has_options

    def test_no_option_list(self, repo):
        order = repo.create(_validated(draft()))
        assert not order.has_options
        assert OrderOption.objects.count() == 0

    def test_empty_option_list_is_remembered(self, repo):
        order = repo.create(_validated(draft(options=[])))
        assert order.has_options
        assert list(order.option_lines.all()) == []

    def test_integral_float_stored_as_int(self, repo):
        product_id = uuid4()
        order = repo.create(
            _validated(draft(products=[{"product_id": product_id, "quantity": 3.0}]))
        )
        assert order.product_lines.get().quantity == 3

    def test_delivery_date_taken_from_validation(self, repo):
        from datetime import datetime

        order = repo.create(
            _validated(draft(requested_delivery_date=datetime(2024, 5, 6, 22, 0)))
        )
        order.refresh_from_db()
        assert order.requested_delivery_date == TODAY


class TestUpdate:
    def test_replaces_lines(self, repo):
        created = repo.create(_validated(draft(products=_lines(3))))
        replacement = _lines(1)

        updated = repo.update(
            str(created.id), _validated(draft(products=replacement), token="b" * 64)
        )

        assert updated.id == created.id
        assert updated.validation_token == "b" * 64
        assert [line.product_id for line in updated.product_lines.all()] == [
            replacement[0]["product_id"]
        ]
        assert OrderProduct.objects.count() == 1

    def test_removing_option_list(self, repo):
        created = repo.create(
            _validated(draft(options=[{"option_id": uuid4(), "quantity": 1}]))
        )

        updated = repo.update(str(created.id), _validated(draft()))

        assert not updated.has_options
        assert OrderOption.objects.count() == 0

    def test_missing_order(self, repo):
        assert repo.update(str(uuid4()), _validated(draft())) is None

    def test_malformed_id(self, repo):
        assert repo.update("not-a-uuid", _validated(draft())) is None


class TestReadAndDelete:
    def test_get_by_id(self, repo):
        created = repo.create(_validated(draft()))
        assert repo.get_by_id(str(created.id)) == created

    @pytest.mark.parametrize("bad_id", ["not-a-uuid", "", "123"])
    def test_get_by_invalid_id_returns_none(self, repo, bad_id):
        assert repo.get_by_id(bad_id) is None

    def test_list_newest_first(self, repo):
        first = repo.create(_validated(draft()))
        second = repo.create(_validated(draft()))
        assert [o.id for o in repo.list()] == [second.id, first.id]

    def test_list_with_filters(self, repo):
        room_id = uuid4()
        match = repo.create(_validated(draft(room_id=room_id)))
        repo.create(_validated(draft()))
        assert [o.id for o in repo.list({"room_id": room_id})] == [match.id]

    def test_delete_removes_lines(self, repo):
        created = repo.create(
            _validated(draft(options=[{"option_id": uuid4(), "quantity": 1}]))
        )

        assert repo.delete(str(created.id)) is True

        assert Order.objects.count() == 0
        assert OrderProduct.objects.count() == 0
        assert OrderOption.objects.count() == 0

    def test_delete_missing(self, repo):
        assert repo.delete(str(uuid4())) is False

    def test_store_failure_translated(self, repo):
        with patch.object(
            Order.objects, "prefetch_related", side_effect=OperationalError("gone")
        ):
            with pytest.raises(StoreUnavailable):
                repo.list()
