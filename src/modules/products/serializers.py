"""Product DRF serializers for API output.

Input is validated by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """Read serializer; the window is exposed in its nested wire shape."""

    order_window = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "description",
            "price",
            "availability",
            "max_order_quantity",
            "order_window",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_order_window(self, obj: Product) -> dict:
        return obj.order_window
