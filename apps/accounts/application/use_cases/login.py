from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import authenticate

from apps.accounts.application.services.identity_service import AccountIdentityService
from apps.accounts.domain.errors import InvalidCredentialsError


@dataclass(frozen=True)
class LoginCommand:
    email: str
    password: str


@dataclass(frozen=True)
class LoginResult:
    user: object


class LoginUseCase:
    @staticmethod
    def execute(cmd: LoginCommand) -> LoginResult:
        email = (cmd.email or "").strip()
        if not email or not cmd.password:
            raise InvalidCredentialsError("Invalid email or password.")

        user = AccountIdentityService.find_user_by_email(email)
        if user is None or not user.is_active:
            raise InvalidCredentialsError("Invalid email or password.")

        authenticated = authenticate(username=user.get_username(), password=cmd.password)
        if authenticated is None:
            raise InvalidCredentialsError("Invalid email or password.")
        return LoginResult(user=authenticated)
