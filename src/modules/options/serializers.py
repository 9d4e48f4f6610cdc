"""Option DRF serializers (output only)."""

from __future__ import annotations

from rest_framework import serializers

from modules.options.models import Option


class OptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Option
        fields = [
            "id",
            "name",
            "description",
            "price",
            "availability",
            "max_order_quantity",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
