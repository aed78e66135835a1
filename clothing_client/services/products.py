from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from clothing_client.api import ApiClient


def parse_timestamp(raw) -> datetime:
    if isinstance(raw, datetime):
        return raw
    return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))


def sort_products(products: list[dict], option: str | None) -> list[dict]:
    """Return a sorted copy of ``products``; unknown options keep server order."""
    ordered = list(products)
    if option == "low-to-high":
        ordered.sort(key=lambda product: Decimal(str(product["price"])))
    elif option == "high-to-low":
        ordered.sort(key=lambda product: Decimal(str(product["price"])), reverse=True)
    elif option == "newest":
        ordered.sort(key=lambda product: parse_timestamp(product["created_at"]), reverse=True)
    return ordered


class ProductService:
    def __init__(self, api: ApiClient):
        self.api = api

    def list_categories(self) -> list[dict]:
        return self.api.get("categories/")

    def list_products(self, *, category_id: int | None = None, sort: str | None = None) -> list[dict]:
        return self.api.get("products/", category_id=category_id, sort=sort)

    def get_product(self, product_id: int) -> dict | None:
        body = self.api.get(f"products/{product_id}/")
        if isinstance(body, list):
            return body[0] if body else None
        return body

    def list_variants(self, product_id: int) -> list[dict]:
        return self.api.get(f"product_details/product/{product_id}/")
