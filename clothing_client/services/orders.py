from __future__ import annotations

from decimal import Decimal

from clothing_client.api import ApiClient
from clothing_client.services.products import parse_timestamp


class OrderService:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_orders(self) -> list[dict]:
        return [{**order, "created_at": parse_timestamp(order["created_at"])} for order in self.api.get("orders/")]

    def get_order(self, order_id: int) -> dict:
        order = self.api.get(f"orders/{order_id}/")
        return {**order, "created_at": parse_timestamp(order["created_at"])}

    def order_lines(self, order_id: int) -> list[dict]:
        lines = self.api.get(f"order_details/order/{order_id}/")
        return [{**line, "subtotal": Decimal(str(line["price"])) * line["quantity"]} for line in lines]

    def cancel(self, order_id: int) -> dict:
        return self.api.put(f"orders/{order_id}/", {"order_status": "canceled"})["order"]
