from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.accounts.domain.errors import AccountAlreadyExistsError
from apps.accounts.domain.policies import (
    validate_address,
    validate_email,
    validate_full_name,
    validate_new_password,
    validate_phone,
)
from apps.accounts.models import CustomerProfile


@dataclass(frozen=True)
class RegisterCustomerCommand:
    full_name: str
    email: str
    password: str
    phone: str
    address: str


@dataclass(frozen=True)
class RegisterCustomerResult:
    user: object


class RegisterCustomerUseCase:
    @staticmethod
    @transaction.atomic
    def execute(cmd: RegisterCustomerCommand) -> RegisterCustomerResult:
        full_name = validate_full_name(cmd.full_name)
        email = validate_email(cmd.email)
        phone = validate_phone(cmd.phone)
        address = validate_address(cmd.address)
        password = validate_new_password(cmd.password)

        UserModel = get_user_model()
        if UserModel.objects.filter(email__iexact=email).exists() or UserModel.objects.filter(
            username__iexact=email
        ).exists():
            raise AccountAlreadyExistsError("An account with this email already exists.", field="email")

        user = UserModel.objects.create_user(username=email, email=email, password=password)
        CustomerProfile.objects.create(
            user=user,
            full_name=full_name,
            phone=phone,
            address=address,
            role=CustomerProfile.ROLE_CUSTOMER,
        )

        return RegisterCustomerResult(user=user)
