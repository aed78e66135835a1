from __future__ import annotations

from rest_framework.permissions import BasePermission

from apps.accounts.models import CustomerProfile


def is_store_admin(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    if user.is_staff:
        return True
    return CustomerProfile.objects.filter(user=user, role=CustomerProfile.ROLE_ADMIN).exists()


class IsStoreAdmin(BasePermission):
    """Authenticated staff users or users whose profile role is admin."""

    message = "Admin access required."

    def has_permission(self, request, view) -> bool:
        return is_store_admin(getattr(request, "user", None))
