from __future__ import annotations


class CatalogDomainError(ValueError):
    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.field = field


class CatalogValidationError(CatalogDomainError):
    pass


class ProductNotFoundError(CatalogDomainError):
    pass


class ProductDetailNotFoundError(CatalogDomainError):
    pass
