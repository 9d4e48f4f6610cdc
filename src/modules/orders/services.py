"""Order service layer (Use Cases).

Drives one order through validate-then-persist:

1. Read a snapshot of the catalog entries the draft references.
2. Evaluate the draft with the admissibility engine at ``clock()``.
3. Rejected: raise ``OrderValidationFailed`` with every violation;
   nothing is stored.
4. Accepted: store the order and its lines atomically.

Catalog stock is never decremented or locked.  Two orders evaluated
against the same stock can both be admitted; setting
``ORDER_RECHECK_BEFORE_COMMIT`` narrows that window by re-evaluating
inside the write transaction.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional
from zoneinfo import ZoneInfo

import structlog
from django.conf import settings
from django.db import transaction
from django.utils import timezone

from modules.core.exceptions import require_confirmation
from modules.core.messages import get_message_catalog
from modules.orders.catalog import fetch_snapshot
from modules.orders.constants import LifecycleState
from modules.orders.dtos import OrderDraftDTO
from modules.orders.engine import EvaluationResult, OrderAdmissibilityEngine
from modules.orders.exceptions import OrderNotFound, OrderValidationFailed
from modules.orders.lifecycle import OrderLifecycle

if TYPE_CHECKING:
    from modules.orders.catalog import ICatalogStore
    from modules.orders.dtos import UpdateOrderDTO
    from modules.orders.engine import ValidatedOrder
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


def build_engine() -> OrderAdmissibilityEngine:
    """Engine configured from settings (reference zone, message catalog)."""
    return OrderAdmissibilityEngine(
        messages=get_message_catalog(),
        tz=ZoneInfo(getattr(settings, "ORDER_REFERENCE_TIME_ZONE", "UTC")),
    )


class OrderService:
    """Application service for Order use-cases.

    Receives the repository, catalog store, engine and clock via
    constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        catalog_store: ICatalogStore,
        engine: Optional[OrderAdmissibilityEngine] = None,
        clock: Callable[[], datetime] = timezone.now,
        recheck_before_commit: Optional[bool] = None,
    ) -> None:
        self._order_repo = order_repository
        self._catalog = catalog_store
        self._engine = engine or build_engine()
        self._clock = clock
        if recheck_before_commit is None:
            recheck_before_commit = getattr(
                settings, "ORDER_RECHECK_BEFORE_COMMIT", False
            )
        self._recheck = recheck_before_commit

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create_order(self, draft: OrderDraftDTO) -> Order:
        """Validate *draft* and store it.

        Raises:
            OrderValidationFailed: one or more rules failed.
            StoreUnavailable: the catalog or order store is unreachable.
        """
        lifecycle = OrderLifecycle(operation="create")
        validated = self._admit(draft, lifecycle)

        with transaction.atomic():
            validated = self._recheck_if_enabled(validated, lifecycle)
            order = self._order_repo.create(validated)
        lifecycle.advance(LifecycleState.PERSISTED)

        logger.info(
            "order.created",
            order_id=str(order.id),
            room_id=str(order.room_id),
            delivery_date=str(order.requested_delivery_date),
        )
        return order

    def update_order(self, id: str, patch: UpdateOrderDTO) -> Order:
        """Merge *patch* onto the stored order and re-validate the whole result.

        Raises:
            OrderNotFound: the order does not exist.
            OrderValidationFailed: the merged order breaks one or more rules.
        """
        current = self.get_order(id)
        candidate = OrderDraftDTO.from_entity(current).merge(patch)

        lifecycle = OrderLifecycle(operation="update", order_id=str(id))
        validated = self._admit(candidate, lifecycle)

        with transaction.atomic():
            validated = self._recheck_if_enabled(validated, lifecycle)
            order = self._order_repo.update(id, validated)
        if order is None:
            raise OrderNotFound(f"Order {id} not found.")
        lifecycle.advance(LifecycleState.PERSISTED)

        logger.info(
            "order.updated",
            order_id=str(id),
            changed_fields=sorted(patch.changed_fields),
        )
        return order

    def delete_order(self, id: str, confirm: Any) -> None:
        """Delete an order.

        Raises:
            ConfirmationRequired: *confirm* is not the boolean ``True``.
            OrderNotFound: the order does not exist.
        """
        require_confirmation(confirm)
        lifecycle = OrderLifecycle(LifecycleState.PERSISTED, order_id=str(id))
        with transaction.atomic():
            if not self._order_repo.delete(id):
                raise OrderNotFound(f"Order {id} not found.")
        lifecycle.advance(LifecycleState.DELETED)
        logger.info("order.deleted", order_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, id: str) -> Order:
        order = self._order_repo.get_by_id(id)
        if not order:
            raise OrderNotFound(f"Order {id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> List[Order]:
        return self._order_repo.list(filters)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _evaluate(
        self, draft: OrderDraftDTO, now: datetime
    ) -> EvaluationResult:
        snapshot = fetch_snapshot(self._catalog, draft)
        return self._engine.evaluate(draft, snapshot, now)

    def _admit(self, draft: OrderDraftDTO, lifecycle: OrderLifecycle) -> ValidatedOrder:
        lifecycle.advance(LifecycleState.VALIDATING)
        result = self._evaluate(draft, self._clock())
        if not result.accepted:
            lifecycle.advance(LifecycleState.REJECTED)
            logger.info("order.rejected", violations=result.kinds)
            raise OrderValidationFailed(result.violations)
        lifecycle.advance(LifecycleState.ACCEPTED)
        return result.validated

    def _recheck_if_enabled(
        self, validated: ValidatedOrder, lifecycle: OrderLifecycle
    ) -> ValidatedOrder:
        """Re-evaluate against fresh catalog state at the original instant."""
        if not self._recheck:
            return validated
        result = self._evaluate(validated.draft, validated.validated_at)
        if not result.accepted:
            logger.info(
                "order.recheck_failed",
                state=str(lifecycle.state),
                violations=result.kinds,
            )
            raise OrderValidationFailed(result.violations)
        return result.validated
