from __future__ import annotations

from datetime import date, datetime, timezone as dt_timezone
from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase
from rest_framework.test import APIClient

from apps.catalog.models import Category, Product, ProductDetail
from apps.orders.models import Order, OrderDetail
from apps.statistics.domain.params import parse_date_range, parse_limit, parse_year, resolve_sort


def _at(year: int, month: int, day: int, hour: int = 12) -> datetime:
    return datetime(year, month, day, hour, tzinfo=dt_timezone.utc)


class StatisticsParamsTests(TestCase):
    def test_limit_fallbacks(self):
        self.assertEqual(parse_limit(None), 5)
        self.assertEqual(parse_limit("abc"), 5)
        self.assertEqual(parse_limit("-3"), 5)
        self.assertEqual(parse_limit("0"), 0)
        self.assertEqual(parse_limit("12"), 12)

    def test_year_fallback(self):
        self.assertEqual(parse_year("2024", default=2026), 2024)
        self.assertEqual(parse_year("twenty", default=2026), 2026)
        self.assertEqual(parse_year(None, default=2026), 2026)

    def test_sort_allow_list(self):
        self.assertEqual(resolve_sort("dangerous_field", "drop"), ("created_at", "DESC"))
        self.assertEqual(resolve_sort("total_price", "asc"), ("total_price", "ASC"))

    def test_unreadable_date_bounds_are_dropped(self):
        self.assertTrue(parse_date_range("2024-13-01", "garbage").is_open)
        self.assertTrue(parse_date_range("", None).is_open)
        partial = parse_date_range("yesterday", "2024-01-31")
        self.assertIsNone(partial.start)
        self.assertEqual(partial.end, date(2024, 1, 31))

    def test_inverted_range_is_kept_as_given(self):
        inverted = parse_date_range("2024-02-01", "2024-01-01")
        self.assertEqual((inverted.start, inverted.end), (date(2024, 2, 1), date(2024, 1, 1)))
        self.assertFalse(inverted.is_open)


class StatisticsApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        User = get_user_model()
        self.admin = User.objects.create_user(
            username="admin@example.com", email="admin@example.com", password="x", is_staff=True
        )
        self.alice = User.objects.create_user(username="alice@example.com", email="alice@example.com", password="x")
        self.bob = User.objects.create_user(username="bob@example.com", email="bob@example.com", password="x")

        self.shirts = Category.objects.create(name="Shirts")
        self.pants = Category.objects.create(name="Pants")
        self.hats = Category.objects.create(name="Hats")

        self.tee = Product.objects.create(category=self.shirts, name="Tee", price=Decimal("100.00"))
        self.jeans = Product.objects.create(category=self.pants, name="Jeans", price=Decimal("300.00"))
        self.cap = Product.objects.create(category=self.hats, name="Cap", price=Decimal("50.00"))
        self.tee_m = ProductDetail.objects.create(product=self.tee, color="white", size="M", stock_quantity=10)
        self.jeans_l = ProductDetail.objects.create(product=self.jeans, color="blue", size="L", stock_quantity=10)
        self.cap_s = ProductDetail.objects.create(product=self.cap, color="red", size="S", stock_quantity=10)

        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

    def _order(self, user, total, status, created_at, lines=()):
        order = Order.objects.create(
            user=user, total_price=Decimal(total), order_status=status, created_at=created_at
        )
        for detail, quantity, price in lines:
            OrderDetail.objects.create(order=order, detail=detail, quantity=quantity, price=Decimal(price))
        return order

    def test_requires_admin(self):
        client = APIClient()
        client.force_authenticate(user=self.alice)
        response = client.get("/api/statistics/dashboard/")
        self.assertEqual(response.status_code, 403)
        self.assertFalse(response.json()["success"])

        anonymous = APIClient().get("/api/statistics/dashboard/")
        self.assertEqual(anonymous.status_code, 401)

    def test_dashboard_excludes_canceled_revenue_but_counts_orders(self):
        self._order(self.alice, "100.00", "delivered", _at(2024, 1, 5), [(self.tee_m, 1, "100.00")])
        self._order(self.bob, "300.00", "pending", _at(2024, 1, 6), [(self.jeans_l, 1, "300.00")])
        self._order(self.bob, "999.00", "canceled", _at(2024, 1, 7), [(self.cap_s, 9, "999.00")])

        response = self.client.get("/api/statistics/dashboard/")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["total_orders"], 3)
        self.assertEqual(payload["total_revenue"], 400.0)
        self.assertEqual(payload["total_customers"], 2)
        self.assertEqual(payload["pending_orders"], 1)
        self.assertEqual(payload["completed_orders"], 1)
        self.assertEqual(payload["canceled_orders"], 1)
        self.assertEqual(payload["top_selling_product"]["name"], "Tee")

    def test_dashboard_date_range_is_inclusive(self):
        self._order(self.alice, "10.00", "pending", _at(2023, 12, 31, 23))
        self._order(self.alice, "20.00", "pending", _at(2024, 1, 1, 0))
        self._order(self.alice, "30.00", "pending", _at(2024, 1, 31, 23))
        self._order(self.alice, "40.00", "pending", _at(2024, 2, 1, 0))

        response = self.client.get(
            "/api/statistics/dashboard/", {"start_date": "2024-01-01", "end_date": "2024-01-31"}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total_orders"], 2)
        self.assertEqual(response.json()["total_revenue"], 50.0)

        open_end = self.client.get("/api/statistics/dashboard/", {"start_date": "2024-01-31"})
        self.assertEqual(open_end.json()["total_orders"], 2)

    def test_dashboard_without_orders_has_null_top_product(self):
        payload = self.client.get("/api/statistics/dashboard/").json()
        self.assertEqual(payload["total_orders"], 0)
        self.assertEqual(payload["total_revenue"], 0.0)
        self.assertIsNone(payload["top_selling_product"])

    def test_dashboard_ignores_unreadable_dates(self):
        self._order(self.alice, "10.00", "pending", _at(2023, 6, 1))
        self._order(self.alice, "20.00", "pending", _at(2024, 6, 1))

        response = self.client.get("/api/statistics/dashboard/", {"start_date": "yesterday", "end_date": "soon"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total_orders"], 2)

        half = self.client.get("/api/statistics/dashboard/", {"start_date": "garbage", "end_date": "2023-12-31"})
        self.assertEqual(half.json()["total_orders"], 1)

    def test_dashboard_inverted_range_is_empty(self):
        self._order(self.alice, "100.00", "delivered", _at(2024, 1, 15), [(self.tee_m, 1, "100.00")])

        response = self.client.get(
            "/api/statistics/dashboard/", {"start_date": "2024-02-01", "end_date": "2024-01-01"}
        )
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["total_orders"], 0)
        self.assertEqual(payload["total_revenue"], 0.0)
        self.assertEqual(payload["total_customers"], 0)
        self.assertIsNone(payload["top_selling_product"])

    def test_dashboard_skips_deleted_orders(self):
        self._order(self.alice, "100.00", "delivered", _at(2024, 1, 5), [(self.tee_m, 1, "100.00")])
        gone = self._order(self.bob, "900.00", "delivered", _at(2024, 1, 6), [(self.jeans_l, 9, "900.00")])
        gone.is_deleted = True
        gone.save(update_fields=["is_deleted"])

        payload = self.client.get("/api/statistics/dashboard/").json()
        self.assertEqual(payload["total_orders"], 1)
        self.assertEqual(payload["total_revenue"], 100.0)
        self.assertEqual(payload["total_customers"], 1)
        self.assertEqual(payload["completed_orders"], 1)
        self.assertEqual(payload["top_selling_product"]["name"], "Tee")

    def test_monthly_revenue_skips_deleted_orders(self):
        self._order(self.alice, "100.00", "delivered", _at(2024, 5, 1))
        gone = self._order(self.alice, "700.00", "delivered", _at(2024, 5, 2))
        gone.is_deleted = True
        gone.save(update_fields=["is_deleted"])

        may = self.client.get("/api/statistics/monthly-revenue/", {"year": "2024"}).json()[4]
        self.assertEqual(may, {"month": "2024-05", "revenue": 100.0, "total_orders": 1})

    def test_top_products_skip_deleted_orders_and_products(self):
        self._order(
            self.alice, "0.00", "delivered", _at(2024, 1, 1), [(self.tee_m, 1, "100.00"), (self.cap_s, 2, "100.00")]
        )
        gone = self._order(self.alice, "0.00", "delivered", _at(2024, 1, 2), [(self.jeans_l, 50, "300.00")])
        gone.is_deleted = True
        gone.save(update_fields=["is_deleted"])

        payload = self.client.get("/api/statistics/top-products/").json()
        self.assertEqual([row["product_name"] for row in payload], ["Cap", "Tee"])

        self.cap.is_deleted = True
        self.cap.save(update_fields=["is_deleted"])
        payload = self.client.get("/api/statistics/top-products/").json()
        self.assertEqual([row["product_name"] for row in payload], ["Tee"])

    def test_revenue_by_category_skips_deleted_orders(self):
        self._order(self.alice, "0.00", "delivered", _at(2024, 1, 1), [(self.tee_m, 1, "100.00")])
        gone = self._order(self.alice, "0.00", "delivered", _at(2024, 1, 2), [(self.jeans_l, 1, "300.00")])
        gone.is_deleted = True
        gone.save(update_fields=["is_deleted"])

        payload = self.client.get("/api/statistics/revenue-by-category/").json()
        self.assertEqual(payload, [{"category_name": "Shirts", "revenue": 100.0}])

    def test_revenue_by_category_skips_deleted_products(self):
        self._order(
            self.alice, "0.00", "delivered", _at(2024, 1, 1), [(self.tee_m, 1, "100.00"), (self.jeans_l, 1, "300.00")]
        )
        self.jeans.is_deleted = True
        self.jeans.save(update_fields=["is_deleted"])

        payload = self.client.get("/api/statistics/revenue-by-category/").json()
        self.assertEqual(payload, [{"category_name": "Shirts", "revenue": 100.0}])

    def test_revenue_by_category_skips_deleted_categories(self):
        self._order(
            self.alice, "0.00", "delivered", _at(2024, 1, 1), [(self.tee_m, 1, "100.00"), (self.jeans_l, 1, "300.00")]
        )
        self.pants.is_deleted = True
        self.pants.save(update_fields=["is_deleted"])

        payload = self.client.get("/api/statistics/revenue-by-category/").json()
        self.assertEqual(payload, [{"category_name": "Shirts", "revenue": 100.0}])

    def test_monthly_revenue_always_has_twelve_months(self):
        self._order(self.alice, "100.00", "delivered", _at(2024, 3, 10))
        self._order(self.alice, "50.00", "canceled", _at(2024, 3, 11))
        self._order(self.alice, "70.00", "pending", _at(2025, 3, 11))

        payload = self.client.get("/api/statistics/monthly-revenue/", {"year": "2024"}).json()
        self.assertEqual([row["month"] for row in payload], [f"2024-{m:02d}" for m in range(1, 13)])
        march = payload[2]
        self.assertEqual(march["revenue"], 100.0)
        self.assertEqual(march["total_orders"], 2)
        self.assertEqual(payload[0], {"month": "2024-01", "revenue": 0, "total_orders": 0})

        empty = self.client.get("/api/statistics/monthly-revenue/", {"year": "1999"}).json()
        self.assertEqual(len(empty), 12)
        self.assertTrue(all(row["total_orders"] == 0 for row in empty))

    def test_order_status_distribution_skips_deleted(self):
        self._order(self.alice, "1.00", "pending", _at(2024, 1, 1))
        self._order(self.alice, "1.00", "pending", _at(2024, 1, 2))
        self._order(self.alice, "1.00", "shipped", _at(2024, 1, 3))
        gone = self._order(self.alice, "1.00", "delivered", _at(2024, 1, 4))
        gone.is_deleted = True
        gone.save(update_fields=["is_deleted"])

        payload = self.client.get("/api/statistics/order-status-distribution/").json()
        self.assertEqual(
            sorted((row["status"], row["count"]) for row in payload),
            [("pending", 2), ("shipped", 1)],
        )

    def test_revenue_by_category_omits_zero_revenue(self):
        self._order(
            self.alice,
            "400.00",
            "delivered",
            _at(2024, 1, 1),
            [(self.tee_m, 1, "100.00"), (self.jeans_l, 1, "300.00"), (self.cap_s, 1, "0.00")],
        )
        self._order(self.alice, "50.00", "canceled", _at(2024, 1, 2), [(self.cap_s, 1, "50.00")])

        payload = self.client.get("/api/statistics/revenue-by-category/").json()
        self.assertEqual(
            payload,
            [{"category_name": "Pants", "revenue": 300.0}, {"category_name": "Shirts", "revenue": 100.0}],
        )

    def test_top_products_limit(self):
        self._order(
            self.alice,
            "0.00",
            "delivered",
            _at(2024, 1, 1),
            [(self.tee_m, 3, "300.00"), (self.jeans_l, 2, "600.00"), (self.cap_s, 1, "50.00")],
        )

        none = self.client.get("/api/statistics/top-products/", {"limit": "0"}).json()
        self.assertEqual(none, [])

        payload = self.client.get("/api/statistics/top-products/", {"limit": "5"}).json()
        self.assertEqual([row["product_name"] for row in payload], ["Tee", "Jeans", "Cap"])
        self.assertEqual(payload[0]["total_sold"], 3)
        self.assertEqual(payload[0]["revenue"], 300.0)

        fallback = self.client.get("/api/statistics/top-products/", {"limit": "lots"}).json()
        self.assertEqual(len(fallback), 3)

    def test_recent_orders_ignore_unknown_sort_fields(self):
        first = self._order(self.alice, "500.00", "pending", _at(2024, 1, 1))
        second = self._order(self.alice, "100.00", "pending", _at(2024, 1, 2))
        third = self._order(self.alice, "300.00", "pending", _at(2024, 1, 3))

        payload = self.client.get(
            "/api/statistics/recent-orders/", {"sort": "dangerous_field", "order": "sideways"}
        ).json()
        self.assertEqual([row["order_id"] for row in payload], [third.id, second.id, first.id])

        by_price = self.client.get(
            "/api/statistics/recent-orders/", {"sort": "total_price", "order": "asc", "limit": "2"}
        ).json()
        self.assertEqual([row["order_id"] for row in by_price], [second.id, third.id])
        self.assertEqual(by_price[0]["total_price"], 100.0)

    def test_database_errors_become_500_envelope(self):
        with patch(
            "apps.statistics.interfaces.api.views.StatisticsService.dashboard",
            side_effect=DatabaseError("connection lost"),
        ):
            response = self.client.get("/api/statistics/dashboard/")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(),
            {"success": False, "message": "Error fetching dashboard statistics", "error": "connection lost"},
        )
