"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.  Rejected
orders answer 400 with every violation; domain exceptions are translated
into status codes and generic exceptions are never swallowed.
"""

from __future__ import annotations

from typing import Sequence

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ConfirmationRequired, confirmation_from
from modules.core.messages import get_message_catalog
from modules.orders.catalog import DjangoCatalogStore
from modules.orders.dtos import OrderDraftDTO, UpdateOrderDTO
from modules.orders.engine import Violation
from modules.orders.exceptions import OrderNotFound, OrderValidationFailed
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer
from modules.orders.services import OrderService


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repository and catalog store (DIP).
    Does **not** extend ``ModelViewSet``: all writes go through the
    service/repository layer.
    """

    queryset = Order.objects.prefetch_related("product_lines", "option_lines")
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            catalog_store=DjangoCatalogStore(),
        )
        self._messages = get_message_catalog()

    def _not_found(self) -> Response:
        return Response(
            {"detail": self._messages.get("not_found.order")},
            status=status.HTTP_404_NOT_FOUND,
        )

    def _invalid_input(self, exc: PydanticValidationError) -> Response:
        return Response(
            {
                "detail": self._messages.get("invalid_input"),
                "errors": [
                    {
                        "field": ".".join(str(part) for part in error["loc"]),
                        "message": error["msg"],
                    }
                    for error in exc.errors()
                ],
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    def _rejected(self, violations: Sequence[Violation]) -> Response:
        return Response(
            {
                "detail": self._messages.get("validation_failed"),
                "errors": [violation.as_dict() for violation in violations],
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (room, delivery date range) is handled by ``OrderFilter``.
        """
        queryset = self.filter_queryset(self.get_queryset())
        return Response(OrderSerializer(queryset, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return self._not_found()
        return Response(OrderSerializer(order).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        try:
            draft = OrderDraftDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return self._invalid_input(exc)

        try:
            order = self._service.create_order(draft)
        except OrderValidationFailed as exc:
            return self._rejected(exc.violations)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/

        The patched order is re-validated as a whole.
        """
        try:
            patch = UpdateOrderDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return self._invalid_input(exc)

        try:
            order = self._service.update_order(pk, patch)
        except OrderNotFound:
            return self._not_found()
        except OrderValidationFailed as exc:
            return self._rejected(exc.violations)
        return Response(OrderSerializer(order).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/ with body ``{"confirm": true}``."""
        try:
            self._service.delete_order(pk, confirmation_from(request.data))
        except ConfirmationRequired:
            return Response(
                {"detail": self._messages.get("confirmation_required")},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except OrderNotFound:
            return self._not_found()
        return Response(status=status.HTTP_204_NO_CONTENT)
