"""
Dashboard aggregates over orders, order lines, products and categories.

Every query ignores soft-deleted orders. Revenue excludes canceled orders
while order counts include them. Revenue figures sum the captured
order-line price.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db.models import Count, Q, QuerySet, Sum
from django.db.models.functions import TruncMonth

from apps.orders.domain.status import OrderStatus
from apps.orders.models import Order, OrderDetail

from ..domain.params import DEFAULT_LIMIT, DateRange, resolve_sort

logger = logging.getLogger("clothing.statistics")

_CANCELED = OrderStatus.CANCELED.value

_RECENT_ORDER_COLUMNS = {
    "order_id": "id",
    "created_at": "created_at",
    "total_price": "total_price",
    "order_status": "order_status",
}


def _money(value) -> float:
    return float(value or Decimal("0"))


class StatisticsService:
    @staticmethod
    def _within(qs: QuerySet, date_range: DateRange | None, field: str) -> QuerySet:
        if date_range is None or date_range.is_open:
            return qs
        if date_range.start is not None:
            qs = qs.filter(**{f"{field}__date__gte": date_range.start})
        if date_range.end is not None:
            qs = qs.filter(**{f"{field}__date__lte": date_range.end})
        return qs

    @staticmethod
    def _orders_in_range(date_range: DateRange | None) -> QuerySet[Order]:
        return StatisticsService._within(Order.objects.filter(is_deleted=False), date_range, "created_at")

    @staticmethod
    def _sold_lines() -> QuerySet[OrderDetail]:
        return OrderDetail.objects.filter(order__is_deleted=False).exclude(order__order_status=_CANCELED)

    @staticmethod
    def dashboard(date_range: DateRange | None = None) -> dict:
        totals = StatisticsService._orders_in_range(date_range).aggregate(
            total_orders=Count("id"),
            total_revenue=Sum("total_price", filter=~Q(order_status=_CANCELED)),
            total_customers=Count("user_id", distinct=True),
            pending_orders=Count("id", filter=Q(order_status=OrderStatus.PENDING.value)),
            completed_orders=Count("id", filter=Q(order_status=OrderStatus.DELIVERED.value)),
            canceled_orders=Count("id", filter=Q(order_status=_CANCELED)),
        )
        return {
            "total_orders": totals["total_orders"],
            "total_revenue": _money(totals["total_revenue"]),
            "total_customers": totals["total_customers"],
            "pending_orders": totals["pending_orders"],
            "completed_orders": totals["completed_orders"],
            "canceled_orders": totals["canceled_orders"],
            "top_selling_product": StatisticsService.top_selling_product(date_range),
        }

    @staticmethod
    def top_selling_product(date_range: DateRange | None = None) -> dict | None:
        lines = StatisticsService._within(StatisticsService._sold_lines(), date_range, "order__created_at")

        row = (
            lines.values("detail__product_id", "detail__product__name")
            .annotate(total_sold=Sum("quantity"), revenue=Sum("price"))
            .order_by("-total_sold")
            .first()
        )
        if row is None:
            return None
        return {
            "name": row["detail__product__name"],
            "total_sold": row["total_sold"],
            "revenue": _money(row["revenue"]),
        }

    @staticmethod
    def monthly_revenue(year: int) -> list[dict]:
        rows = (
            Order.objects.filter(is_deleted=False, created_at__year=year)
            .annotate(month=TruncMonth("created_at"))
            .values("month")
            .annotate(
                revenue=Sum("total_price", filter=~Q(order_status=_CANCELED)),
                total_orders=Count("id"),
            )
            .order_by("month")
        )
        by_month = {
            row["month"].strftime("%Y-%m"): {
                "revenue": _money(row["revenue"]),
                "total_orders": row["total_orders"],
            }
            for row in rows
        }

        result = []
        for month in range(1, 13):
            key = f"{year:04d}-{month:02d}"
            found = by_month.get(key, {"revenue": 0, "total_orders": 0})
            result.append({"month": key, **found})
        return result

    @staticmethod
    def order_status_distribution() -> list[dict]:
        rows = (
            Order.objects.filter(is_deleted=False)
            .values("order_status")
            .annotate(count=Count("id"))
            .order_by("order_status")
        )
        return [{"status": row["order_status"], "count": row["count"]} for row in rows]

    @staticmethod
    def revenue_by_category() -> list[dict]:
        rows = (
            StatisticsService._sold_lines()
            .filter(
                detail__product__is_deleted=False,
                detail__product__category__is_deleted=False,
            )
            .values("detail__product__category_id", "detail__product__category__name")
            .annotate(revenue=Sum("price"))
            .filter(revenue__gt=0)
            .order_by("-revenue")
        )
        return [
            {"category_name": row["detail__product__category__name"], "revenue": _money(row["revenue"])}
            for row in rows
        ]

    @staticmethod
    def top_products(limit: int = DEFAULT_LIMIT) -> list[dict]:
        if limit <= 0:
            return []
        rows = (
            StatisticsService._sold_lines()
            .filter(detail__product__is_deleted=False)
            .values("detail__product_id", "detail__product__name")
            .annotate(total_sold=Sum("quantity"), revenue=Sum("price"))
            .order_by("-total_sold")[:limit]
        )
        return [
            {
                "product_id": row["detail__product_id"],
                "product_name": row["detail__product__name"],
                "total_sold": row["total_sold"],
                "revenue": _money(row["revenue"]),
            }
            for row in rows
        ]

    @staticmethod
    def recent_orders(limit: int = DEFAULT_LIMIT, sort: str | None = None, order: str | None = None) -> list[dict]:
        if limit <= 0:
            return []
        sort_field, direction = resolve_sort(sort, order)
        prefix = "-" if direction == "DESC" else ""
        rows = (
            Order.objects.filter(is_deleted=False)
            .order_by(f"{prefix}{_RECENT_ORDER_COLUMNS[sort_field]}", f"{prefix}id")
            .values("id", "user_id", "total_price", "order_status", "created_at")[:limit]
        )
        logger.debug("recent_orders", extra={"sort": sort_field, "direction": direction, "limit": limit})
        return [
            {
                "order_id": row["id"],
                "user_id": row["user_id"],
                "total_price": _money(row["total_price"]),
                "order_status": row["order_status"],
                "created_at": row["created_at"],
            }
            for row in rows
        ]
