from __future__ import annotations


class PaymentDomainError(ValueError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class UnknownPaymentMethodError(PaymentDomainError):
    pass


class PaymentNotAllowedError(PaymentDomainError):
    pass
