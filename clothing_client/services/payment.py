from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from clothing_client.api import ApiClient
from clothing_client.errors import NotLoggedInError
from clothing_client.session import CART_KEY, USER_KEY

logger = logging.getLogger("clothing.client")


@dataclass(frozen=True)
class PaymentDetails:
    cart: list[dict]
    subtotal: Decimal
    shipping_fee: Decimal
    total: Decimal


class PaymentService:
    def __init__(self, api: ApiClient):
        self.api = api

    def payment_details(self) -> PaymentDetails:
        """Summarize the current cart the way the checkout screen shows it."""
        if not self.api.session.get_item(USER_KEY):
            raise NotLoggedInError("User not found")

        cart = self.api.get("cart/")
        self.api.session.set_item(CART_KEY, cart)
        subtotal = sum((Decimal(str(item["price"])) * item["quantity"] for item in cart), Decimal("0"))
        shipping_fee = self.api.config.shipping_fee
        return PaymentDetails(cart=cart, subtotal=subtotal, shipping_fee=shipping_fee, total=subtotal + shipping_fee)

    def payment_methods(self) -> list[dict]:
        return self.api.get("payments/methods/")

    def list_payments(self) -> list[dict]:
        return self.api.get("payments/")

    def place_order(self, payment_method: str = "cod") -> dict:
        body = self.api.post("checkout/", {"payment_method": payment_method})
        self.api.session.remove_item(CART_KEY)
        logger.info("client_order_placed", extra={"order_id": body["order"]["order_id"]})
        return body
