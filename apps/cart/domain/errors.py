from __future__ import annotations


class CartDomainError(ValueError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class CartValidationError(CartDomainError):
    pass


class CartItemNotFoundError(CartDomainError):
    pass
