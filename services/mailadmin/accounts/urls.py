"""Route registration for account endpoints."""
from __future__ import annotations

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from .views import AccountViewSet, health

router = DefaultRouter()
router.register("users", AccountViewSet, basename="account")

urlpatterns = [
    path("healthz/", health, name="mailadmin-health"),
    path("", include(router.urls)),
]
