from __future__ import annotations

from apps.payments.domain.errors import UnknownPaymentMethodError
from apps.payments.domain.ports import PaymentGatewayPort
from apps.payments.infrastructure.gateways.cash_on_delivery import CashOnDeliveryGateway


class PaymentGatewayFacade:
    _registry: dict[str, PaymentGatewayPort] = {
        CashOnDeliveryGateway.code: CashOnDeliveryGateway(),
    }

    @classmethod
    def get(cls, method_code: str) -> PaymentGatewayPort:
        key = (method_code or "").strip().lower()
        if key not in cls._registry:
            raise UnknownPaymentMethodError(f"Unknown payment method: {method_code}", field="method")
        return cls._registry[key]

    @classmethod
    def available_methods(cls) -> list[dict]:
        return [{"code": adapter.code, "name": adapter.name} for adapter in cls._registry.values()]
