"""Option URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.options.views import OptionViewSet

router = DefaultRouter(trailing_slash=True)
router.register("options", OptionViewSet, basename="option")

urlpatterns = router.urls
