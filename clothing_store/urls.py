"""
URL configuration for the clothing_store project.

The API lives under `/api/`; health probes sit at the root so load
balancers can reach them without authentication.
"""

from django.contrib import admin
from django.urls import include, path

from apps.observability.views.health import healthz, readyz

handler403 = "clothing_store.error_views.handle_403"
handler404 = "clothing_store.error_views.handle_404"
handler500 = "clothing_store.error_views.handle_500"

urlpatterns = [
    path("healthz", healthz, name="healthz"),
    path("readyz", readyz, name="readyz"),
    path("admin/", admin.site.urls),
    path("api/", include("clothing_store.api_urls")),
]
