"""Option API views."""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ConfirmationRequired, confirmation_from
from modules.core.messages import get_message_catalog
from modules.options.dtos import CreateOptionDTO, UpdateOptionDTO
from modules.options.exceptions import OptionAlreadyExists, OptionNotFound
from modules.options.filters import OptionFilter
from modules.options.models import Option
from modules.options.repositories.django_repository import OptionDjangoRepository
from modules.options.serializers import OptionSerializer
from modules.options.services import OptionService


class OptionViewSet(GenericViewSet):
    queryset = Option.objects.all()
    serializer_class = OptionSerializer
    filterset_class = OptionFilter
    filter_backends = [DjangoFilterBackend]
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OptionService(repository=OptionDjangoRepository())
        self._messages = get_message_catalog()

    def _error(self, key: str, code: int) -> Response:
        return Response({"detail": self._messages.get(key)}, status=code)

    def list(self, request: Request) -> Response:
        """GET /api/v1/options/"""
        queryset = self.filter_queryset(self.get_queryset())
        return Response(OptionSerializer(queryset, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/options/{pk}/"""
        try:
            option = self._service.get_option(pk)
        except OptionNotFound:
            return self._error("not_found.option", status.HTTP_404_NOT_FOUND)
        return Response(OptionSerializer(option).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/options/"""
        try:
            dto = CreateOptionDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            option = self._service.create_option(dto)
        except OptionAlreadyExists:
            return self._error("already_exists.option", status.HTTP_409_CONFLICT)
        return Response(OptionSerializer(option).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/options/{pk}/"""
        try:
            dto = UpdateOptionDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            option = self._service.update_option(pk, dto)
        except OptionNotFound:
            return self._error("not_found.option", status.HTTP_404_NOT_FOUND)
        except OptionAlreadyExists:
            return self._error("already_exists.option", status.HTTP_409_CONFLICT)
        return Response(OptionSerializer(option).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/options/{pk}/ with body ``{"confirm": true}``."""
        try:
            self._service.delete_option(pk, confirmation_from(request.data))
        except ConfirmationRequired:
            return self._error("confirmation_required", status.HTTP_400_BAD_REQUEST)
        except OptionNotFound:
            return self._error("not_found.option", status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)
