from __future__ import annotations

import json
import tempfile
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from unittest import TestCase

import httpx

from clothing_client import ApiClient, ApiError, ClientConfig, NotLoggedInError, SessionStore, StockLimitError
from clothing_client.services import (
    AccountService,
    CartService,
    OrderService,
    PaymentService,
    StatisticsService,
    sort_products,
)


class _Recorder:
    """Routes requests to canned JSON responses and remembers what was sent."""

    def __init__(self, routes: dict[tuple[str, str], tuple[int, object]]):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.routes.get((request.method, request.url.path), (404, {"success": False, "message": "Not found"}))
        return httpx.Response(status, json=body)


class _ClientCase(TestCase):
    routes: dict = {}

    def setUp(self) -> None:
        super().setUp()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.session = SessionStore(Path(self.tmp.name) / "session.json")
        self.recorder = _Recorder(dict(self.routes))
        self.api = ApiClient(
            ClientConfig(base_url="http://store.test/api", timeout=5),
            session=self.session,
            transport=httpx.MockTransport(self.recorder),
        )
        self.addCleanup(self.api.close)


class SessionStoreTests(TestCase):
    def test_items_survive_a_new_store_instance(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "session.json"
            store = SessionStore(path)
            store.set_item("token", "abc")
            store.set_item("user", {"user_id": 1})

            reopened = SessionStore(path)
            self.assertEqual(reopened.get_item("token"), "abc")
            self.assertEqual(reopened.get_item("user"), {"user_id": 1})

            reopened.remove_item("token")
            self.assertIsNone(store.get_item("token"))
            store.clear()
            self.assertEqual(json.loads(path.read_text()), {})

    def test_corrupt_file_reads_as_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "session.json"
            path.write_text("{not json")
            self.assertEqual(SessionStore(path).get_item("cart", []), [])


class ApiClientTests(_ClientCase):
    routes = {
        ("GET", "/api/products/"): (200, []),
        ("GET", "/api/cart/"): (401, {"success": False, "message": "Authentication credentials were not provided."}),
    }

    def test_bearer_header_only_when_token_stored(self):
        self.api.get("products/")
        self.assertNotIn("authorization", self.recorder.requests[-1].headers)

        self.session.set_item("token", "jwt-123")
        self.api.get("products/", category_id=None, sort="newest")
        request = self.recorder.requests[-1]
        self.assertEqual(request.headers["authorization"], "Bearer jwt-123")
        self.assertEqual(str(request.url), "http://store.test/api/products/?sort=newest")

    def test_error_carries_server_message(self):
        with self.assertRaises(ApiError) as ctx:
            self.api.get("cart/")
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.message, "Authentication credentials were not provided.")


class AccountServiceTests(_ClientCase):
    user = {"user_id": 7, "full_name": "Ann", "email": "ann@example.com", "phone": "0912345678", "address": "HN"}
    routes = {
        ("POST", "/api/auth/login/"): (200, {"success": True, "token": "t1", "refresh": "r1", "user": user}),
        ("PUT", "/api/user/update-profile/"): (200, {"success": True, "user": {**user, "full_name": "Ann B"}}),
    }

    def test_login_update_logout_keep_session_in_sync(self):
        service = AccountService(self.api)
        service.login("ann@example.com", "secret1")
        self.assertEqual(self.session.get_item("token"), "t1")
        self.assertEqual(service.current_user()["user_id"], 7)

        service.update_profile(full_name="Ann B", email="ann@example.com")
        self.assertEqual(self.session.get_item("user")["full_name"], "Ann B")

        service.logout()
        with self.assertRaises(NotLoggedInError):
            service.current_user()


class CartServiceTests(_ClientCase):
    routes = {
        ("PUT", "/api/cart/3/"): (200, {"success": True, "item": {"id": 3, "quantity": 2}}),
    }

    def test_stock_ceiling_is_checked_before_calling(self):
        service = CartService(self.api)
        with self.assertRaises(StockLimitError) as ctx:
            service.update_quantity(3, 5, stock_quantity=4)
        self.assertEqual(ctx.exception.available, 4)
        self.assertEqual(self.recorder.requests, [])

        item = service.update_quantity(3, 2, stock_quantity=4)
        self.assertEqual(item["quantity"], 2)
        self.assertEqual(json.loads(self.recorder.requests[-1].content), {"quantity": 2})


class OrderServiceTests(_ClientCase):
    routes = {
        ("GET", "/api/orders/"): (
            200,
            [{"order_id": 1, "total_price": 100.0, "order_status": "pending", "created_at": "2024-01-05T10:00:00Z"}],
        ),
        ("GET", "/api/order_details/order/1/"): (200, [{"order_detail_id": 9, "price": 12.5, "quantity": 3}]),
    }

    def test_timestamps_and_subtotals(self):
        service = OrderService(self.api)
        orders = service.list_orders()
        self.assertEqual(orders[0]["created_at"], datetime(2024, 1, 5, 10, tzinfo=timezone.utc))
        lines = service.order_lines(1)
        self.assertEqual(lines[0]["subtotal"], Decimal("37.5"))


class PaymentServiceTests(_ClientCase):
    routes = {
        ("GET", "/api/cart/"): (200, [{"id": 1, "price": 100.0, "quantity": 2}, {"id": 2, "price": 50.5, "quantity": 1}]),
        ("POST", "/api/checkout/"): (201, {"success": True, "order": {"order_id": 11}}),
    }

    def test_payment_details_require_a_user(self):
        with self.assertRaises(NotLoggedInError):
            PaymentService(self.api).payment_details()

    def test_details_then_place_order_drops_cached_cart(self):
        self.session.set_item("user", {"user_id": 1})
        service = PaymentService(self.api)
        details = service.payment_details()
        self.assertEqual(details.subtotal, Decimal("250.5"))
        self.assertEqual(details.shipping_fee, Decimal("25000"))
        self.assertEqual(details.total, Decimal("25250.5"))
        self.assertEqual(len(self.session.get_item("cart")), 2)

        body = service.place_order()
        self.assertEqual(body["order"]["order_id"], 11)
        self.assertIsNone(self.session.get_item("cart"))


class StatisticsServiceTests(_ClientCase):
    routes = {("GET", "/api/statistics/recent-orders/"): (200, [])}

    def test_only_given_params_are_sent(self):
        StatisticsService(self.api).recent_orders(limit=3, order="asc")
        self.assertEqual(dict(self.recorder.requests[-1].url.params), {"limit": "3", "order": "asc"})


class SortProductsTests(TestCase):
    products = [
        {"product_id": 1, "price": "20.00", "created_at": "2024-01-01T00:00:00Z"},
        {"product_id": 2, "price": "5.00", "created_at": "2024-03-01T00:00:00Z"},
        {"product_id": 3, "price": "12.00", "created_at": "2024-02-01T00:00:00Z"},
    ]

    def test_sort_options(self):
        ids = lambda rows: [row["product_id"] for row in rows]
        self.assertEqual(ids(sort_products(self.products, "low-to-high")), [2, 3, 1])
        self.assertEqual(ids(sort_products(self.products, "high-to-low")), [1, 3, 2])
        self.assertEqual(ids(sort_products(self.products, "newest")), [2, 3, 1])
        self.assertEqual(ids(sort_products(self.products, "bogus")), [1, 2, 3])
