from __future__ import annotations


class OrderDomainError(ValueError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class OrderValidationError(OrderDomainError):
    pass


class OrderNotFoundError(OrderDomainError):
    pass


class InvalidStatusTransitionError(OrderDomainError):
    pass


class OrderPermissionError(OrderDomainError):
    pass


class EmptyCartError(OrderValidationError):
    pass
