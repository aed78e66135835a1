"""
API URL aggregation.

Collects every app's API routes under `/api/`.
"""

from django.urls import include, path
from rest_framework_simplejwt.views import TokenRefreshView, TokenVerifyView

urlpatterns = [
    path("auth/token/refresh/", TokenRefreshView.as_view(), name="token_refresh"),
    path("auth/token/verify/", TokenVerifyView.as_view(), name="token_verify"),
    path("", include("apps.accounts.interfaces.api.urls")),
    path("", include("apps.catalog.interfaces.api.urls")),
    path("", include("apps.cart.interfaces.api.urls")),
    path("", include("apps.orders.interfaces.api.urls")),
    path("", include("apps.payments.interfaces.api.urls")),
    path("statistics/", include("apps.statistics.interfaces.api.urls")),
]
