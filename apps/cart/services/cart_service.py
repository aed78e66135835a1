from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import QuerySet, Sum

from apps.catalog.domain.errors import ProductDetailNotFoundError
from apps.catalog.services.product_service import ProductService

from ..domain.errors import CartItemNotFoundError, CartValidationError
from ..models import CartItem

logger = logging.getLogger("clothing.cart")


class CartService:
    @staticmethod
    def _validate_quantity(quantity) -> int:
        if quantity is None or int(quantity) < 1:
            raise CartValidationError("Quantity must be at least 1", field="quantity")
        return int(quantity)

    @staticmethod
    def list_items(user_id: int) -> QuerySet[CartItem]:
        return (
            CartItem.objects.filter(user_id=user_id)
            .select_related("product", "detail")
            .order_by("created_at", "id")
        )

    @staticmethod
    def count_items(user_id: int) -> int:
        total = CartItem.objects.filter(user_id=user_id).aggregate(total=Sum("quantity"))["total"]
        return int(total or 0)

    @staticmethod
    def get_item(user_id: int, item_id: int) -> CartItem:
        item = CartService.list_items(user_id).filter(id=item_id).first()
        if item is None:
            raise CartItemNotFoundError("Cart item not found")
        return item

    @staticmethod
    def add_item(*, user_id: int, detail_id: int, quantity: int, product_id: int | None = None) -> CartItem:
        quantity = CartService._validate_quantity(quantity)
        try:
            detail = ProductService.get_detail(detail_id)
        except ProductDetailNotFoundError as exc:
            raise CartValidationError(str(exc), field="detail_id") from exc
        if product_id is not None and detail.product_id != product_id:
            raise CartValidationError("Variant does not belong to this product", field="detail_id")

        item = CartItem.objects.create(
            user_id=user_id,
            product_id=detail.product_id,
            detail=detail,
            quantity=quantity,
        )
        logger.info("cart_item_added", extra={"user_id": user_id, "cart_item_id": item.id, "detail_id": detail.id})
        return CartService.get_item(user_id, item.id)

    @staticmethod
    def update_quantity(*, user_id: int, item_id: int, quantity: int) -> CartItem:
        quantity = CartService._validate_quantity(quantity)
        updated = CartItem.objects.filter(id=item_id, user_id=user_id).update(quantity=quantity)
        if not updated:
            raise CartItemNotFoundError("Cart item not found")
        return CartService.get_item(user_id, item_id)

    @staticmethod
    def remove_item(*, user_id: int, item_id: int) -> None:
        deleted, _ = CartItem.objects.filter(id=item_id, user_id=user_id).delete()
        if not deleted:
            raise CartItemNotFoundError("Cart item not found")

    @staticmethod
    @transaction.atomic
    def clear(user_id: int) -> int:
        deleted, _ = CartItem.objects.filter(user_id=user_id).delete()
        logger.info("cart_cleared", extra={"user_id": user_id, "deleted": deleted})
        return deleted
