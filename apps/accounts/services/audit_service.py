"""
Account audit trail.

Registration, sign-in attempts and credential changes each leave one
``AccountAuditLog`` row and one ``clothing.accounts`` log line.
"""

from __future__ import annotations

import logging

from apps.accounts.models import AccountAuditLog

logger = logging.getLogger("clothing.accounts")

USER_AGENT_MAX_LENGTH = 512


def client_ip(request) -> str | None:
    if request is None:
        return None
    value = request.META.get("HTTP_X_FORWARDED_FOR") or request.META.get("REMOTE_ADDR")
    if not value:
        return None
    return value.split(",")[0].strip() or None


def client_user_agent(request) -> str:
    if request is None:
        return ""
    return (request.META.get("HTTP_USER_AGENT") or "")[:USER_AGENT_MAX_LENGTH]


class AccountAuditService:
    ACTION_REGISTERED = AccountAuditLog.ACTION_REGISTERED
    ACTION_LOGIN_SUCCEEDED = AccountAuditLog.ACTION_LOGIN_SUCCEEDED
    ACTION_LOGIN_FAILED = AccountAuditLog.ACTION_LOGIN_FAILED
    ACTION_PROFILE_UPDATED = AccountAuditLog.ACTION_PROFILE_UPDATED
    ACTION_PASSWORD_CHANGED = AccountAuditLog.ACTION_PASSWORD_CHANGED

    @staticmethod
    def record(action: str, *, user=None, request=None, **metadata) -> AccountAuditLog:
        entry = AccountAuditLog.objects.create(
            user_id=getattr(user, "id", None),
            action=action,
            ip_address=client_ip(request),
            user_agent=client_user_agent(request),
            metadata=metadata,
        )
        level = logging.WARNING if action == AccountAuditLog.ACTION_LOGIN_FAILED else logging.INFO
        logger.log(level, "account_%s", action, extra={"user_id": entry.user_id, "ip": entry.ip_address})
        return entry
