from __future__ import annotations

from decimal import Decimal
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from apps.accounts.models import CustomerProfile
from apps.cart.models import CartItem
from apps.catalog.models import Category, Product, ProductDetail
from apps.orders.domain.errors import InvalidStatusTransitionError
from apps.orders.domain.status import OrderStatus, OrderStatusMachine
from apps.orders.models import Order, OrderDetail
from apps.payments.models import Payment


class OrderStatusMachineTests(TestCase):
    def test_cancel_only_before_shipping(self):
        self.assertTrue(OrderStatusMachine.can_cancel("pending"))
        self.assertTrue(OrderStatusMachine.can_cancel("processing"))
        self.assertFalse(OrderStatusMachine.can_cancel("shipped"))
        self.assertFalse(OrderStatusMachine.can_cancel("delivered"))
        self.assertFalse(OrderStatusMachine.can_cancel("canceled"))

    def test_forward_only_transitions(self):
        self.assertEqual(OrderStatusMachine.ensure_transition("pending", "processing"), OrderStatus.PROCESSING)
        self.assertEqual(OrderStatusMachine.ensure_transition("shipped", "delivered"), OrderStatus.DELIVERED)
        with self.assertRaises(InvalidStatusTransitionError):
            OrderStatusMachine.ensure_transition("shipped", "pending")
        with self.assertRaises(InvalidStatusTransitionError):
            OrderStatusMachine.ensure_transition("pending", "refunded")


class _OrderFixtures(TestCase):
    def setUp(self) -> None:
        super().setUp()
        User = get_user_model()
        self.user = User.objects.create_user(username="buyer@example.com", email="buyer@example.com", password="x")
        self.other = User.objects.create_user(username="other@example.com", email="other@example.com", password="x")
        category = Category.objects.create(name="Shirts")
        self.tee = Product.objects.create(category=category, name="Tee", price=Decimal("100.00"))
        self.polo = Product.objects.create(category=category, name="Polo", price=Decimal("250.00"))
        self.tee_m = ProductDetail.objects.create(product=self.tee, color="white", size="M", stock_quantity=5)
        self.polo_l = ProductDetail.objects.create(product=self.polo, color="navy", size="L", stock_quantity=1)
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def _fill_cart(self):
        CartItem.objects.create(user=self.user, product=self.tee, detail=self.tee_m, quantity=2)
        CartItem.objects.create(user=self.user, product=self.polo, detail=self.polo_l, quantity=1)


@override_settings(SHIPPING_FEE=25000)
class CheckoutApiTests(_OrderFixtures):
    def test_checkout_creates_order_details_payment_and_clears_cart(self):
        self._fill_cart()
        response = self.client.post("/api/checkout/", {}, format="json")
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["subtotal"], 450.0)
        self.assertEqual(payload["shipping_fee"], 25000.0)
        self.assertEqual(payload["order"]["order_status"], "pending")
        self.assertEqual(payload["order"]["total_price"], 25450.0)
        self.assertEqual(payload["payment"]["method"], "cod")
        self.assertEqual(payload["payment"]["status"], "pending")

        order = Order.objects.get(pk=payload["order"]["order_id"])
        lines = sorted((line.detail_id, line.quantity, line.price) for line in order.details.all())
        self.assertEqual(
            lines,
            sorted([(self.tee_m.id, 2, Decimal("100.00")), (self.polo_l.id, 1, Decimal("250.00"))]),
        )
        self.assertFalse(CartItem.objects.filter(user=self.user).exists())
        self.assertEqual(Payment.objects.get(order=order).amount, order.total_price)

    def test_captured_price_survives_later_price_changes(self):
        self._fill_cart()
        order_id = self.client.post("/api/checkout/", {}, format="json").json()["order"]["order_id"]
        self.tee.price = Decimal("999.00")
        self.tee.save()
        line = OrderDetail.objects.get(order_id=order_id, detail=self.tee_m)
        self.assertEqual(line.price, Decimal("100.00"))

    def test_empty_cart_is_rejected(self):
        response = self.client.post("/api/checkout/", {}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Your cart is empty")
        self.assertFalse(Order.objects.exists())

    def test_deleted_product_in_cart_is_rejected(self):
        self._fill_cart()
        self.polo.is_deleted = True
        self.polo.save()
        response = self.client.post("/api/checkout/", {}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Some cart items have invalid data")
        self.assertEqual(CartItem.objects.filter(user=self.user).count(), 2)

    def test_unknown_payment_method_is_rejected(self):
        self._fill_cart()
        response = self.client.post("/api/checkout/", {"payment_method": "bitcoin"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "method")
        self.assertFalse(Order.objects.exists())

    def test_failure_midway_rolls_back_everything(self):
        self._fill_cart()
        with patch(
            "apps.orders.application.use_cases.place_order.RecordPaymentUseCase.execute",
            side_effect=RuntimeError("gateway exploded"),
        ):
            with self.assertRaises(RuntimeError):
                self.client.post("/api/checkout/", {}, format="json")

        self.assertFalse(Order.objects.exists())
        self.assertFalse(OrderDetail.objects.exists())
        self.assertEqual(CartItem.objects.filter(user=self.user).count(), 2)


class OrderApiTests(_OrderFixtures):
    def _order(self, user=None, status="pending", **kwargs):
        return Order.objects.create(
            user=user or self.user, total_price=kwargs.pop("total_price", Decimal("100.00")), order_status=status, **kwargs
        )

    def test_list_orders_newest_first_and_scoped(self):
        first = self._order()
        second = self._order()
        self._order(user=self.other)
        self._order(is_deleted=True)
        response = self.client.get("/api/orders/")
        self.assertEqual([o["order_id"] for o in response.json()], [second.id, first.id])

    def _admin_client(self) -> APIClient:
        admin = get_user_model().objects.create_user(username="a@example.com", email="a@example.com", password="x")
        CustomerProfile.objects.create(user=admin, role=CustomerProfile.ROLE_ADMIN)
        client = APIClient()
        client.force_authenticate(user=admin)
        return client

    def test_admin_creates_pending_order_for_customer(self):
        response = self._admin_client().post(
            "/api/orders/",
            {"user_id": self.user.id, "total_price": "125.00", "order_status": "delivered"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.json()["order_status"], "pending")
        self.assertEqual(response.json()["user_id"], self.user.id)

    def test_admin_create_order_for_unknown_customer(self):
        response = self._admin_client().post(
            "/api/orders/", {"user_id": 999999, "total_price": "10.00"}, format="json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "user_id")

    def test_customers_cannot_write_raw_orders_or_lines(self):
        response = self.client.post("/api/orders/", {"total_price": "0.01"}, format="json")
        self.assertEqual(response.status_code, 403)

        order = self._order()
        response = self.client.post(
            "/api/order_details/",
            {"order_id": order.id, "detail_id": self.tee_m.id, "quantity": 5, "price": "0.01"},
            format="json",
        )
        self.assertEqual(response.status_code, 403)
        self.assertFalse(OrderDetail.objects.filter(order=order).exists())
        self.assertEqual(Order.objects.filter(user=self.user).count(), 1)

    def test_customer_can_cancel_pending_order(self):
        order = self._order()
        response = self.client.put(f"/api/orders/{order.id}/", {"order_status": "canceled"}, format="json")
        self.assertEqual(response.status_code, 200)
        order.refresh_from_db()
        self.assertEqual(order.order_status, "canceled")

    def test_customer_cannot_cancel_shipped_order(self):
        order = self._order(status="shipped")
        response = self.client.put(f"/api/orders/{order.id}/", {"order_status": "canceled"}, format="json")
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])
        order.refresh_from_db()
        self.assertEqual(order.order_status, "shipped")

    def test_customer_cannot_advance_fulfilment(self):
        order = self._order()
        response = self.client.put(f"/api/orders/{order.id}/", {"order_status": "processing"}, format="json")
        self.assertEqual(response.status_code, 403)

    def test_admin_advances_any_order(self):
        order = self._order()
        client = self._admin_client()
        response = client.put(f"/api/orders/{order.id}/", {"order_status": "processing"}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["order"]["order_status"], "processing")

    def test_other_users_order_is_not_found(self):
        order = self._order(user=self.other)
        self.assertEqual(self.client.get(f"/api/orders/{order.id}/").status_code, 404)
        self.assertEqual(self.client.get(f"/api/order_details/order/{order.id}/").status_code, 404)

    def test_soft_delete_hides_order(self):
        order = self._order()
        self.assertEqual(self.client.delete(f"/api/orders/{order.id}/").status_code, 200)
        order.refresh_from_db()
        self.assertTrue(order.is_deleted)
        self.assertEqual(self.client.get(f"/api/orders/{order.id}/").status_code, 404)

    def test_admin_adds_line_to_customer_order(self):
        order = self._order()
        response = self._admin_client().post(
            "/api/order_details/",
            {"order_id": order.id, "detail_id": self.tee_m.id, "quantity": 3, "price": "100.00"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)

        listing = self.client.get(f"/api/order_details/order/{order.id}/")
        self.assertEqual(listing.status_code, 200)
        row = listing.json()[0]
        self.assertEqual(row["product_name"], "Tee")
        self.assertEqual(row["color"], "white")
        self.assertEqual(row["quantity"], 3)
        self.assertEqual(row["price"], 100.0)

    def test_order_detail_requires_pending_order(self):
        order = self._order(status="canceled")
        response = self._admin_client().post(
            "/api/order_details/",
            {"order_id": order.id, "detail_id": self.tee_m.id, "quantity": 1, "price": "100.00"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)
