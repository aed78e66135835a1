from __future__ import annotations

from clothing_client.api import ApiClient


class StatisticsService:
    """Admin dashboard reads, one call per endpoint."""

    def __init__(self, api: ApiClient):
        self.api = api

    def dashboard(self, *, start_date: str | None = None, end_date: str | None = None) -> dict:
        return self.api.get("statistics/dashboard/", start_date=start_date, end_date=end_date)

    def monthly_revenue(self, year: int | None = None) -> list[dict]:
        return self.api.get("statistics/monthly-revenue/", year=year)

    def order_status_distribution(self) -> list[dict]:
        return self.api.get("statistics/order-status-distribution/")

    def revenue_by_category(self) -> list[dict]:
        return self.api.get("statistics/revenue-by-category/")

    def top_products(self, limit: int | None = None) -> list[dict]:
        return self.api.get("statistics/top-products/", limit=limit)

    def recent_orders(self, *, limit: int | None = None, sort: str | None = None, order: str | None = None) -> list[dict]:
        return self.api.get("statistics/recent-orders/", limit=limit, sort=sort, order=order)
