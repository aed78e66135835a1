from __future__ import annotations

from django.contrib.auth import get_user_model

from apps.accounts.domain.policies import normalize_email
from apps.accounts.models import CustomerProfile


class AccountIdentityService:
    @staticmethod
    def find_user_by_email(email: str):
        normalized = normalize_email(email)
        if not normalized:
            return None
        return get_user_model().objects.filter(email__iexact=normalized).first()

    @staticmethod
    def profile_for(user) -> CustomerProfile:
        profile, _ = CustomerProfile.objects.get_or_create(
            user=user,
            defaults={"role": CustomerProfile.ROLE_ADMIN if user.is_staff else CustomerProfile.ROLE_CUSTOMER},
        )
        return profile

    @staticmethod
    def summary(user) -> dict:
        """Shape stored by clients as the session `user` entry."""
        profile = AccountIdentityService.profile_for(user)
        return {
            "user_id": user.id,
            "full_name": profile.full_name,
            "email": user.email,
            "phone": profile.phone,
            "address": profile.address,
            "role": profile.role,
        }
