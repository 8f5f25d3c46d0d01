"""URL configuration for the mailadmin service."""
from django.urls import include, path

urlpatterns = [
    path("api/", include("accounts.urls")),
]
