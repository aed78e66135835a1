from __future__ import annotations

import re

from .errors import (
    AccountValidationError,
    EmailInvalidError,
    FullNameInvalidError,
    PasswordInvalidError,
    PhoneInvalidError,
)

_PHONE_RE = re.compile(r"^[0-9]{10,11}$")
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 6


def validate_full_name(raw: str) -> str:
    name = (raw or "").strip()
    if not name:
        raise FullNameInvalidError("Full name is required.", field="full_name")
    if len(name) > 200:
        raise FullNameInvalidError("Full name must be 200 characters or fewer.", field="full_name")
    return name


def normalize_phone(raw: str) -> str:
    return re.sub(r"[\s\-().]+", "", (raw or "").strip())


def validate_phone(raw: str, *, required: bool = True) -> str:
    phone = normalize_phone(raw)
    if not phone:
        if required:
            raise PhoneInvalidError("Phone number is required.", field="phone")
        return ""
    if not _PHONE_RE.match(phone):
        raise PhoneInvalidError("Please enter a valid phone number (10-11 digits).", field="phone")
    return phone


def normalize_email(raw: str) -> str:
    return (raw or "").strip().lower()


def validate_email(raw: str) -> str:
    email = normalize_email(raw)
    if not email:
        raise EmailInvalidError("Email is required.", field="email")
    if len(email) > 254:
        raise EmailInvalidError("Email must be 254 characters or fewer.", field="email")
    if not _EMAIL_RE.match(email):
        raise EmailInvalidError("Please enter a valid email address.", field="email")
    return email


def validate_address(raw: str, *, required: bool = True) -> str:
    address = (raw or "").strip()
    if required and not address:
        raise AccountValidationError("Address is required.", field="address")
    if len(address) > 500:
        raise AccountValidationError("Address must be 500 characters or fewer.", field="address")
    return address


def validate_new_password(new_password: str, *, old_password: str | None = None) -> str:
    if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
        raise PasswordInvalidError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.", field="new_password"
        )
    if old_password is not None and old_password == new_password:
        raise PasswordInvalidError("New password must be different from old password.", field="new_password")
    return new_password
