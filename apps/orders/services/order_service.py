from __future__ import annotations

import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet

from apps.catalog.domain.errors import ProductDetailNotFoundError
from apps.catalog.services.product_service import ProductService

from ..domain.errors import OrderNotFoundError, OrderPermissionError, OrderValidationError
from ..domain.status import OrderStatus, OrderStatusMachine
from ..models import Order, OrderDetail

logger = logging.getLogger("clothing.orders")


class OrderService:
    @staticmethod
    def _visible_orders(*, user_id: int, is_admin: bool = False) -> QuerySet[Order]:
        qs = Order.objects.filter(is_deleted=False)
        return qs if is_admin else qs.filter(user_id=user_id)

    @staticmethod
    def list_orders(*, user_id: int) -> QuerySet[Order]:
        return OrderService._visible_orders(user_id=user_id).order_by("-created_at", "-id")

    @staticmethod
    def get_order(*, user_id: int, order_id: int, is_admin: bool = False) -> Order:
        order = OrderService._visible_orders(user_id=user_id, is_admin=is_admin).filter(id=order_id).first()
        if order is None:
            raise OrderNotFoundError("Order not found")
        return order

    @staticmethod
    def create_order(*, user_id: int, total_price) -> Order:
        if not get_user_model().objects.filter(pk=user_id).exists():
            raise OrderValidationError("Customer not found", field="user_id")
        if total_price is None or Decimal(total_price) < 0:
            raise OrderValidationError("Total price cannot be negative", field="total_price")
        order = Order.objects.create(
            user_id=user_id,
            total_price=total_price,
            order_status=OrderStatus.PENDING.value,
        )
        logger.info("order_created", extra={"order_id": order.id, "user_id": user_id})
        return order

    @staticmethod
    @transaction.atomic
    def change_status(*, user_id: int, order_id: int, target: str, is_admin: bool = False) -> Order:
        order = OrderService.get_order(user_id=user_id, order_id=order_id, is_admin=is_admin)
        destination = OrderStatusMachine.parse(target)
        if not is_admin and destination != OrderStatus.CANCELED:
            raise OrderPermissionError("Customers can only cancel their orders.")

        previous = order.order_status
        order.order_status = OrderStatusMachine.ensure_transition(previous, destination).value
        order.save(update_fields=["order_status"])
        logger.info(
            "order_status_changed",
            extra={"order_id": order.id, "from_status": previous, "to_status": order.order_status},
        )
        return order

    @staticmethod
    def soft_delete(*, user_id: int, order_id: int, is_admin: bool = False) -> None:
        order = OrderService.get_order(user_id=user_id, order_id=order_id, is_admin=is_admin)
        order.is_deleted = True
        order.save(update_fields=["is_deleted"])

    @staticmethod
    def add_detail(
        *, user_id: int, order_id: int, detail_id: int, quantity: int, price, is_admin: bool = False
    ) -> OrderDetail:
        order = OrderService.get_order(user_id=user_id, order_id=order_id, is_admin=is_admin)
        if order.order_status != OrderStatus.PENDING.value:
            raise OrderValidationError("Lines can only be added to pending orders", field="order_id")
        if quantity is None or quantity < 1:
            raise OrderValidationError("Quantity must be at least 1", field="quantity")
        if price is None or Decimal(price) <= 0:
            raise OrderValidationError("Price must be positive", field="price")
        try:
            detail = ProductService.get_detail(detail_id)
        except ProductDetailNotFoundError as exc:
            raise OrderValidationError(str(exc), field="detail_id") from exc

        return OrderDetail.objects.create(order=order, detail=detail, quantity=quantity, price=price)

    @staticmethod
    def list_details(*, user_id: int, order_id: int, is_admin: bool = False) -> QuerySet[OrderDetail]:
        order = OrderService.get_order(user_id=user_id, order_id=order_id, is_admin=is_admin)
        return order.details.select_related("detail__product").order_by("id")
