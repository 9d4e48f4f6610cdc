"""Room DRF serializers (output only; input goes through DTOs)."""

from __future__ import annotations

from rest_framework import serializers

from modules.rooms.models import Room


class RoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = Room
        fields = ["id", "name", "description", "number", "created_at", "updated_at"]
        read_only_fields = fields
