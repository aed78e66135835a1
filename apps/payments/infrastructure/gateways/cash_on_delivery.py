from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

from apps.payments.domain.ports import PaymentOutcome
from apps.payments.models import Payment


class CashOnDeliveryGateway:
    """Nothing is charged up front; the courier collects the amount on delivery."""

    code = "cod"
    name = "Cash on Delivery"

    def create_payment(self, *, order, amount: Decimal) -> PaymentOutcome:
        reference = f"COD-{order.pk}-{uuid4().hex[:8].upper()}"
        return PaymentOutcome(status=Payment.STATUS_PENDING, reference=reference)
