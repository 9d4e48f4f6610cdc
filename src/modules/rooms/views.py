"""Room API views.

Domain exceptions are caught and translated into HTTP status codes;
generic exceptions are never swallowed.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import ConfirmationRequired, confirmation_from
from modules.core.messages import get_message_catalog
from modules.rooms.dtos import CreateRoomDTO, UpdateRoomDTO
from modules.rooms.exceptions import RoomAlreadyExists, RoomNotFound
from modules.rooms.filters import RoomFilter
from modules.rooms.models import Room
from modules.rooms.repositories.django_repository import RoomDjangoRepository
from modules.rooms.serializers import RoomSerializer
from modules.rooms.services import RoomService


class RoomViewSet(GenericViewSet):
    queryset = Room.objects.all()
    serializer_class = RoomSerializer
    filterset_class = RoomFilter
    filter_backends = [DjangoFilterBackend]
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = RoomService(repository=RoomDjangoRepository())
        self._messages = get_message_catalog()

    def _not_found(self) -> Response:
        return Response(
            {"detail": self._messages.get("not_found.room")},
            status=status.HTTP_404_NOT_FOUND,
        )

    def list(self, request: Request) -> Response:
        """GET /api/v1/rooms/"""
        queryset = self.filter_queryset(self.get_queryset())
        return Response(RoomSerializer(queryset, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/rooms/{pk}/"""
        try:
            room = self._service.get_room(pk)
        except RoomNotFound:
            return self._not_found()
        return Response(RoomSerializer(room).data)

    def create(self, request: Request) -> Response:
        """POST /api/v1/rooms/"""
        try:
            dto = CreateRoomDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            room = self._service.create_room(dto)
        except RoomAlreadyExists:
            return Response(
                {"detail": self._messages.get("already_exists.room")},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(RoomSerializer(room).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/rooms/{pk}/"""
        try:
            dto = UpdateRoomDTO.model_validate(request.data)
        except PydanticValidationError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        try:
            room = self._service.update_room(pk, dto)
        except RoomNotFound:
            return self._not_found()
        except RoomAlreadyExists:
            return Response(
                {"detail": self._messages.get("already_exists.room")},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(RoomSerializer(room).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/rooms/{pk}/ with body ``{"confirm": true}``."""
        try:
            self._service.delete_room(pk, confirmation_from(request.data))
        except ConfirmationRequired:
            return Response(
                {"detail": self._messages.get("confirmation_required")},
                status=status.HTTP_400_BAD_REQUEST,
            )
        except RoomNotFound:
            return self._not_found()
        return Response(status=status.HTTP_204_NO_CONTENT)
