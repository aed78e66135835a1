from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol


@dataclass(frozen=True)
class PaymentOutcome:
    status: str
    reference: str


class PaymentGatewayPort(Protocol):
    code: str
    name: str

    def create_payment(self, *, order, amount: Decimal) -> PaymentOutcome:
        ...
