from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth.models import AbstractBaseUser

from apps.accounts.domain.errors import InvalidCredentialsError
from apps.accounts.domain.policies import validate_new_password
from apps.accounts.services.audit_service import AccountAuditService


@dataclass(frozen=True)
class ChangePasswordCommand:
    user: AbstractBaseUser
    old_password: str
    new_password: str


class ChangePasswordUseCase:
    @staticmethod
    def execute(cmd: ChangePasswordCommand) -> None:
        if not cmd.user.check_password(cmd.old_password or ""):
            raise InvalidCredentialsError("Old password is incorrect.")
        new_password = validate_new_password(cmd.new_password, old_password=cmd.old_password)

        cmd.user.set_password(new_password)
        cmd.user.save(update_fields=["password"])
        AccountAuditService.record(AccountAuditService.ACTION_PASSWORD_CHANGED, user=cmd.user)
