"""Order DRF serializers (output only).

Input is parsed into Pydantic DTOs (``dtos.py``) so the admissibility
engine sees every field as submitted.
"""

from __future__ import annotations

from typing import Any, List, Optional

from rest_framework import serializers

from modules.orders.models import Order, OrderOption, OrderProduct


class OrderProductSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderProduct
        fields = ["product_id", "quantity"]
        read_only_fields = fields


class OrderOptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderOption
        fields = ["option_id", "quantity"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with their lines in submission order.

    ``options`` is ``null`` for orders stored without an option list.
    """

    products = OrderProductSerializer(
        source="product_lines", many=True, read_only=True
    )
    options = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "requested_delivery_date",
            "room_id",
            "products",
            "options",
            "validated_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_options(self, obj: Order) -> Optional[List[Any]]:
        if not obj.has_options:
            return None
        return OrderOptionSerializer(obj.option_lines.all(), many=True).data
