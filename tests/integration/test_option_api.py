"""Integration tests for Option API endpoints."""

from __future__ import annotations

from uuid import uuid4

import pytest

from modules.options.models import Option

pytestmark = pytest.mark.integration

URL = "/api/v1/options/"


class TestOptionAPI:
    def test_create_with_defaults(self, api_client):
        response = api_client.post(URL, {"name": "Projektor"}, format="json")

        assert response.status_code == 201
        data = response.json()
        assert data["price"] == "0.00"
        assert data["availability"] == 0
        assert data["max_order_quantity"] == 1

    def test_create_invalid_returns_400(self, api_client):
        response = api_client.post(
            URL, {"name": "Projektor", "max_order_quantity": 0}, format="json"
        )
        assert response.status_code == 400

    def test_duplicate_returns_409(self, api_client, make_option):
        make_option(name="Projektor")
        response = api_client.post(URL, {"name": "Projektor"}, format="json")
        assert response.status_code == 409

    def test_list_and_filter(self, api_client, make_option):
        make_option(name="Projektor")
        make_option(name="Whiteboard")
        response = api_client.get(URL, {"name": "white"})
        assert [o["name"] for o in response.json()] == ["Whiteboard"]

    def test_update(self, api_client, make_option):
        option = make_option()
        response = api_client.patch(
            f"{URL}{option.id}/", {"availability": 9}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["availability"] == 9

    def test_retrieve_missing_returns_404(self, api_client):
        response = api_client.get(f"{URL}{uuid4()}/")
        assert response.status_code == 404

    def test_delete(self, api_client, make_option):
        option = make_option()

        refused = api_client.delete(f"{URL}{option.id}/")
        accepted = api_client.delete(
            f"{URL}{option.id}/", {"confirm": True}, format="json"
        )

        assert refused.status_code == 400
        assert accepted.status_code == 204
        assert not Option.objects.filter(id=option.id).exists()
