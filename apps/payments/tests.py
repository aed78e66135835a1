from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from apps.orders.models import Order
from apps.payments.application.facade import PaymentGatewayFacade
from apps.payments.domain.errors import UnknownPaymentMethodError
from apps.payments.models import Payment


class PaymentGatewayFacadeTests(TestCase):
    def test_resolves_cash_on_delivery_case_insensitively(self):
        gateway = PaymentGatewayFacade.get(" COD ")
        self.assertEqual(gateway.code, "cod")

    def test_unknown_method_raises(self):
        with self.assertRaises(UnknownPaymentMethodError) as ctx:
            PaymentGatewayFacade.get("bitcoin")
        self.assertEqual(ctx.exception.field, "method")


class PaymentApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        User = get_user_model()
        self.user = User.objects.create_user(username="payer@example.com", email="payer@example.com", password="x")
        self.other = User.objects.create_user(username="other@example.com", email="other@example.com", password="x")
        self.order = Order.objects.create(user=self.user, total_price=Decimal("125.00"))
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def test_records_pending_cash_on_delivery_payment(self):
        response = self.client.post("/api/payments/", {"order_id": self.order.id}, format="json")
        self.assertEqual(response.status_code, 201)
        payload = response.json()
        self.assertEqual(payload["method"], "cod")
        self.assertEqual(payload["status"], "pending")
        self.assertEqual(payload["amount"], 125.0)
        self.assertTrue(payload["reference"].startswith(f"COD-{self.order.id}-"))

        listing = self.client.get("/api/payments/").json()
        self.assertEqual([row["payment_id"] for row in listing], [payload["payment_id"]])

    def test_unknown_method_is_rejected(self):
        response = self.client.post(
            "/api/payments/", {"order_id": self.order.id, "method": "card"}, format="json"
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "method")
        self.assertFalse(Payment.objects.exists())

    def test_canceled_orders_cannot_be_paid(self):
        self.order.order_status = "canceled"
        self.order.save(update_fields=["order_status"])
        response = self.client.post("/api/payments/", {"order_id": self.order.id}, format="json")
        self.assertEqual(response.status_code, 400)

    def test_other_users_orders_are_not_found(self):
        client = APIClient()
        client.force_authenticate(user=self.other)
        response = client.post("/api/payments/", {"order_id": self.order.id}, format="json")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(client.get("/api/payments/").json(), [])

    def test_lists_available_methods(self):
        response = self.client.get("/api/payments/methods/")
        self.assertEqual(response.json(), [{"code": "cod", "name": "Cash on Delivery"}])
