from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from django.db import transaction
from django.db.models import QuerySet

from ..domain.errors import CatalogValidationError, ProductDetailNotFoundError, ProductNotFoundError
from ..domain.sorting import ordering_for
from ..models import Category, Product, ProductDetail


class ProductService:
    @staticmethod
    def _validate_price(price) -> None:
        if price is None or Decimal(price) <= 0:
            raise CatalogValidationError("Price must be positive", field="price")

    @staticmethod
    def _resolve_category(category_id: int | None) -> Category | None:
        if category_id is None:
            return None
        category = Category.objects.filter(id=category_id, is_deleted=False).first()
        if category is None:
            raise CatalogValidationError("Category does not exist", field="category_id")
        return category

    @staticmethod
    def active_categories() -> QuerySet[Category]:
        return Category.objects.filter(is_deleted=False).order_by("name", "id")

    @staticmethod
    def list_products(*, category_id: int | None = None, sort: str | None = None) -> QuerySet[Product]:
        qs = Product.objects.filter(is_deleted=False).select_related("category")
        if category_id is not None:
            qs = qs.filter(category_id=category_id)
        return qs.order_by(*ordering_for(sort))

    @staticmethod
    def get_product(product_id: int) -> Product:
        product = Product.objects.filter(id=product_id, is_deleted=False).select_related("category").first()
        if product is None:
            raise ProductNotFoundError("Product not found")
        return product

    @staticmethod
    def list_details(product_id: int) -> QuerySet[ProductDetail]:
        ProductService.get_product(product_id)
        return ProductDetail.objects.filter(product_id=product_id, is_deleted=False).order_by("id")

    @staticmethod
    def get_detail(detail_id: int) -> ProductDetail:
        detail = (
            ProductDetail.objects.filter(id=detail_id, is_deleted=False, product__is_deleted=False)
            .select_related("product")
            .first()
        )
        if detail is None:
            raise ProductDetailNotFoundError("Product variant not found", field="detail_id")
        return detail

    @staticmethod
    @transaction.atomic
    def create_product(
        *,
        name: str,
        price,
        category_id: int | None = None,
        description: str = "",
        image_url: str = "",
        variants: Iterable[dict] | None = None,
    ) -> Product:
        ProductService._validate_price(price)
        name = (name or "").strip()
        if not name:
            raise CatalogValidationError("Product name is required", field="name")

        product = Product.objects.create(
            category=ProductService._resolve_category(category_id),
            name=name,
            description=description or "",
            price=price,
            image_url=image_url or "",
        )
        ProductDetail.objects.bulk_create(
            [
                ProductDetail(
                    product=product,
                    color=variant.get("color") or "",
                    size=variant.get("size") or "",
                    stock_quantity=variant.get("stock_quantity") or 0,
                    image_url=variant.get("image_url") or "",
                )
                for variant in variants or []
            ]
        )
        return product

    @staticmethod
    def soft_delete_product(product_id: int) -> None:
        updated = Product.objects.filter(id=product_id, is_deleted=False).update(is_deleted=True)
        if not updated:
            raise ProductNotFoundError("Product not found")
