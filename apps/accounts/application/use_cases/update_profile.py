from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AbstractBaseUser
from django.db import transaction

from apps.accounts.application.services.identity_service import AccountIdentityService
from apps.accounts.domain.errors import AccountAlreadyExistsError
from apps.accounts.domain.policies import validate_address, validate_email, validate_full_name, validate_phone
from apps.accounts.services.audit_service import AccountAuditService


@dataclass(frozen=True)
class UpdateProfileCommand:
    user: AbstractBaseUser
    full_name: str
    email: str
    phone: str = ""
    address: str = ""


class UpdateProfileUseCase:
    @staticmethod
    @transaction.atomic
    def execute(cmd: UpdateProfileCommand) -> dict:
        full_name = validate_full_name(cmd.full_name)
        email = validate_email(cmd.email)
        phone = validate_phone(cmd.phone, required=False)
        address = validate_address(cmd.address, required=False)

        UserModel = get_user_model()
        if UserModel.objects.filter(email__iexact=email).exclude(pk=cmd.user.pk).exists():
            raise AccountAlreadyExistsError("An account with this email already exists.", field="email")

        user = cmd.user
        if user.email != email:
            user.email = email
            user.username = email
            user.save(update_fields=["email", "username"])

        profile = AccountIdentityService.profile_for(user)
        profile.full_name = full_name
        profile.phone = phone
        profile.address = address
        profile.save(update_fields=["full_name", "phone", "address"])

        AccountAuditService.record(AccountAuditService.ACTION_PROFILE_UPDATED, user=user)
        return AccountIdentityService.summary(user)
