from __future__ import annotations

import logging

from clothing_client.api import ApiClient
from clothing_client.errors import StockLimitError
from clothing_client.session import CART_KEY

logger = logging.getLogger("clothing.client")


class CartService:
    """Cart calls for the signed-in user; the last listing is cached in the session."""

    def __init__(self, api: ApiClient):
        self.api = api

    def list_items(self) -> list[dict]:
        items = self.api.get("cart/")
        self.api.session.set_item(CART_KEY, items)
        return items

    def cached_items(self) -> list[dict]:
        return self.api.session.get_item(CART_KEY, [])

    def count(self) -> int:
        return self.api.get("cart/count/")["count"]

    def add_item(self, *, detail_id: int, quantity: int, product_id: int | None = None) -> dict:
        item = self.api.post("cart/", {"product_id": product_id, "detail_id": detail_id, "quantity": quantity})
        self.api.session.remove_item(CART_KEY)
        return item

    def update_quantity(self, item_id: int, quantity: int, *, stock_quantity: int | None = None) -> dict:
        """Change a line's quantity, refusing locally when it exceeds known stock."""
        if quantity < 1:
            raise StockLimitError("Quantity must be at least 1", available=stock_quantity or 0)
        if stock_quantity is not None and quantity > stock_quantity:
            logger.info("cart_stock_ceiling", extra={"item_id": item_id, "requested": quantity, "stock": stock_quantity})
            raise StockLimitError(f"Only {stock_quantity} left in stock", available=stock_quantity)
        body = self.api.put(f"cart/{item_id}/", {"quantity": quantity})
        self.api.session.remove_item(CART_KEY)
        return body["item"]

    def remove_item(self, item_id: int) -> None:
        self.api.delete(f"cart/{item_id}/")
        self.api.session.remove_item(CART_KEY)

    def clear(self) -> int:
        body = self.api.delete("cart/clear/")
        self.api.session.remove_item(CART_KEY)
        return body.get("deleted", 0)
