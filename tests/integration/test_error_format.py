from unittest.mock import patch
from uuid import uuid4

import pytest

from modules.core.exceptions import StoreUnavailable
from modules.rooms.repositories.django_repository import RoomDjangoRepository

pytestmark = pytest.mark.integration


class TestStoreUnavailable:
    def test_store_failure_returns_503(self, api_client):
        with patch.object(
            RoomDjangoRepository,
            "get_by_id",
            side_effect=StoreUnavailable("connection lost"),
        ):
            response = api_client.get(f"/api/v1/rooms/{uuid4()}/")

        assert response.status_code == 503
        assert response.json() == {"detail": "Tjenesten er midlertidigt utilgængelig"}

    def test_order_creation_store_failure_returns_503(self, api_client, make_room):
        room = make_room()
        with patch(
            "modules.orders.catalog.DjangoCatalogStore.find_room",
            side_effect=StoreUnavailable("connection lost"),
        ):
            response = api_client.post(
                "/api/v1/orders/",
                {"room_id": str(room.id), "products": []},
                format="json",
            )

        assert response.status_code == 503


class TestSchema:
    def test_openapi_schema_served(self, api_client):
        response = api_client.get("/api/schema/")
        assert response.status_code == 200
