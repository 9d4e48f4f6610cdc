"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Writes are
wrapped in ``transaction.atomic()`` so an order and its lines are stored
together.

No catalog rows are locked or decremented here: admission is checked by
the engine against a snapshot, and two orders admitted against the same
stale snapshot are both stored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.repositories.errors import translate_store_errors
from modules.orders.engine import ValidatedOrder, usable_quantity
from modules.orders.models import Order, OrderOption, OrderProduct
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)

_PREFETCH = ("product_lines", "option_lines")


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create / Update
    # ------------------------------------------------------------------

    @translate_store_errors
    @transaction.atomic
    def create(self, validated: ValidatedOrder) -> Order:
        order = Order()
        self._apply(order, validated)
        order.save()
        line_count = self._write_lines(order, validated)

        logger.info("order.inserted", order_id=str(order.id), line_count=line_count)
        return self.get_by_id(str(order.id)) or order

    @translate_store_errors
    @transaction.atomic
    def update(self, id: str, validated: ValidatedOrder) -> Optional[Order]:
        """Replace the order in place, under a row lock."""
        try:
            order = Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None
        if not order:
            return None

        self._apply(order, validated)
        order.save()
        order.product_lines.all().delete()
        order.option_lines.all().delete()
        line_count = self._write_lines(order, validated)

        logger.info("order.replaced", order_id=str(id), line_count=line_count)
        return self.get_by_id(str(order.id))

    @staticmethod
    def _apply(order: Order, validated: ValidatedOrder) -> None:
        draft = validated.draft
        order.requested_delivery_date = validated.delivery_date
        order.room_id = draft.room_id
        order.has_options = draft.options is not None
        order.validated_at = validated.validated_at
        order.validation_token = validated.token

    @staticmethod
    def _write_lines(order: Order, validated: ValidatedOrder) -> int:
        draft = validated.draft
        products = [
            OrderProduct(
                order=order,
                position=position,
                product_id=line.product_id,
                quantity=usable_quantity(line.quantity),
            )
            for position, line in enumerate(draft.products or [])
        ]
        options = [
            OrderOption(
                order=order,
                position=position,
                option_id=line.option_id,
                quantity=usable_quantity(line.quantity),
            )
            for position, line in enumerate(draft.options or [])
        ]
        OrderProduct.objects.bulk_create(products)
        OrderOption.objects.bulk_create(options)
        return len(products) + len(options)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    @translate_store_errors
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with prefetched lines.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.prefetch_related(*_PREFETCH).filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @translate_store_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        """List orders, newest first.

        Supported filter keys include ``room_id`` and
        ``requested_delivery_date__range``.
        """
        queryset = Order.objects.prefetch_related(*_PREFETCH)
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    # ------------------------------------------------------------------
    # Save / Delete (IRepository contract)
    # ------------------------------------------------------------------

    @translate_store_errors
    @transaction.atomic
    def save(self, entity: Order) -> Order:
        entity.save()
        logger.info("order.saved", order_id=str(entity.id))
        return entity

    @translate_store_errors
    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Delete an order and its lines.  ``False`` if nothing matched."""
        order = self.get_by_id(id)
        if not order:
            return False
        order.delete()
        logger.info("order.deleted", order_id=str(id))
        return True
