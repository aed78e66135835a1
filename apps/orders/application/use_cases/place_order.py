from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.db import transaction

from apps.cart.services.cart_service import CartService
from apps.orders.domain.errors import EmptyCartError, OrderValidationError
from apps.orders.domain.status import OrderStatus
from apps.orders.models import Order, OrderDetail
from apps.payments.application.facade import PaymentGatewayFacade
from apps.payments.application.use_cases.record_payment import RecordPaymentCommand, RecordPaymentUseCase
from apps.payments.models import Payment

logger = logging.getLogger("clothing.orders")


@dataclass(frozen=True)
class PlaceOrderCommand:
    user_id: int
    payment_method: str = ""


@dataclass(frozen=True)
class PlaceOrderResult:
    order: Order
    payment: Payment
    subtotal: Decimal
    shipping_fee: Decimal


class PlaceOrderUseCase:
    """
    Checkout as one unit of work.

    Cart lines become order details at the product's current price, the cart is
    emptied and a payment is recorded. Any failure rolls everything back.
    """

    @staticmethod
    @transaction.atomic
    def execute(cmd: PlaceOrderCommand) -> PlaceOrderResult:
        gateway = PaymentGatewayFacade.get(cmd.payment_method or settings.DEFAULT_PAYMENT_METHOD)

        items = list(CartService.list_items(cmd.user_id))
        if not items:
            raise EmptyCartError("Your cart is empty")

        invalid = [
            item.id
            for item in items
            if item.quantity < 1
            or item.product.is_deleted
            or item.detail.is_deleted
            or item.product.price <= 0
        ]
        if invalid:
            raise OrderValidationError("Some cart items have invalid data", field="cart")

        subtotal = sum((item.product.price * item.quantity for item in items), Decimal("0"))
        shipping_fee = Decimal(settings.SHIPPING_FEE)

        order = Order.objects.create(
            user_id=cmd.user_id,
            total_price=subtotal + shipping_fee,
            order_status=OrderStatus.PENDING.value,
        )
        OrderDetail.objects.bulk_create(
            [
                OrderDetail(order=order, detail=item.detail, quantity=item.quantity, price=item.product.price)
                for item in items
            ]
        )
        CartService.clear(cmd.user_id)

        payment = RecordPaymentUseCase.execute(
            RecordPaymentCommand(user_id=cmd.user_id, order_id=order.id, method=gateway.code)
        )

        logger.info(
            "order_placed",
            extra={"order_id": order.id, "user_id": cmd.user_id, "lines": len(items), "total": str(order.total_price)},
        )
        return PlaceOrderResult(order=order, payment=payment, subtotal=subtotal, shipping_fee=shipping_fee)
