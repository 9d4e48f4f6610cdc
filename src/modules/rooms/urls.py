"""Room URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.rooms.views import RoomViewSet

router = DefaultRouter(trailing_slash=True)
router.register("rooms", RoomViewSet, basename="room")

urlpatterns = router.urls
