from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from apps.orders.domain.status import OrderStatus
from apps.orders.services.order_service import OrderService
from apps.payments.application.facade import PaymentGatewayFacade
from apps.payments.domain.errors import PaymentNotAllowedError
from apps.payments.models import Payment

logger = logging.getLogger("clothing.payments")


@dataclass(frozen=True)
class RecordPaymentCommand:
    user_id: int
    order_id: int
    method: str


class RecordPaymentUseCase:
    @staticmethod
    @transaction.atomic
    def execute(cmd: RecordPaymentCommand) -> Payment:
        gateway = PaymentGatewayFacade.get(cmd.method)
        order = OrderService.get_order(user_id=cmd.user_id, order_id=cmd.order_id)
        if order.order_status == OrderStatus.CANCELED.value:
            raise PaymentNotAllowedError("Canceled orders cannot be paid.", field="order_id")

        outcome = gateway.create_payment(order=order, amount=order.total_price)
        payment = Payment.objects.create(
            order=order,
            method=gateway.code,
            status=outcome.status,
            amount=order.total_price,
            reference=outcome.reference,
        )
        logger.info(
            "payment_recorded",
            extra={"order_id": order.id, "payment_id": payment.id, "method": gateway.code, "status": payment.status},
        )
        return payment
