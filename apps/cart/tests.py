from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from apps.cart.models import CartItem
from apps.catalog.models import Category, Product, ProductDetail


class CartApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        User = get_user_model()
        self.user = User.objects.create_user(username="buyer@example.com", email="buyer@example.com", password="x")
        self.other = User.objects.create_user(username="other@example.com", email="other@example.com", password="x")
        category = Category.objects.create(name="Shirts")
        self.product = Product.objects.create(
            category=category, name="Tee", price=Decimal("120.00"), image_url="https://cdn.example.com/tee.png"
        )
        self.detail = ProductDetail.objects.create(product=self.product, color="white", size="M", stock_quantity=5)
        self.other_product = Product.objects.create(category=category, name="Polo", price=Decimal("80.00"))
        self.other_detail = ProductDetail.objects.create(
            product=self.other_product, color="navy", size="L", stock_quantity=2
        )
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def _add(self, detail=None, quantity=1, product=None):
        detail = detail or self.detail
        return self.client.post(
            "/api/cart/",
            {"product_id": (product or detail.product).id, "detail_id": detail.id, "quantity": quantity},
            format="json",
        )

    def test_cart_requires_authentication(self):
        response = APIClient().get("/api/cart/")
        self.assertEqual(response.status_code, 401)

    def test_add_and_list_items(self):
        response = self._add(quantity=2)
        self.assertEqual(response.status_code, 201)
        item = response.json()
        self.assertEqual(item["product_name"], "Tee")
        self.assertEqual(item["price"], 120.0)
        self.assertEqual(item["color"], "white")
        self.assertEqual(item["stock_quantity"], 5)
        self.assertEqual(item["image_url"], "https://cdn.example.com/tee.png")

        listing = self.client.get("/api/cart/")
        self.assertEqual(listing.status_code, 200)
        self.assertEqual([row["id"] for row in listing.json()], [item["id"]])

    def test_adding_same_variant_twice_inserts_two_rows(self):
        self._add(quantity=1)
        self._add(quantity=3)
        self.assertEqual(CartItem.objects.filter(user=self.user, detail=self.detail).count(), 2)
        self.assertEqual(self.client.get("/api/cart/count/").json()["count"], 4)

    def test_add_rejects_variant_of_other_product(self):
        response = self._add(detail=self.other_detail, product=self.product)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "detail_id")

    def test_add_rejects_deleted_variant(self):
        self.detail.is_deleted = True
        self.detail.save()
        response = self._add()
        self.assertEqual(response.status_code, 400)

    def test_add_rejects_zero_quantity(self):
        response = self._add(quantity=0)
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_update_quantity_is_not_capped_by_stock(self):
        item_id = self._add().json()["id"]
        response = self.client.put(f"/api/cart/{item_id}/", {"quantity": 50}, format="json")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])
        self.assertEqual(CartItem.objects.get(pk=item_id).quantity, 50)

    def test_remove_item(self):
        item_id = self._add().json()["id"]
        response = self.client.delete(f"/api/cart/{item_id}/")
        self.assertEqual(response.status_code, 200)
        self.assertFalse(CartItem.objects.filter(pk=item_id).exists())
        self.assertEqual(self.client.delete(f"/api/cart/{item_id}/").status_code, 404)

    def test_items_of_other_users_are_not_found(self):
        foreign = CartItem.objects.create(
            user=self.other, product=self.product, detail=self.detail, quantity=1
        )
        self.assertEqual(self.client.get(f"/api/cart/{foreign.id}/").status_code, 404)
        self.assertEqual(
            self.client.put(f"/api/cart/{foreign.id}/", {"quantity": 2}, format="json").status_code, 404
        )
        self.assertEqual(self.client.delete(f"/api/cart/{foreign.id}/").status_code, 404)
        self.assertEqual(CartItem.objects.get(pk=foreign.id).quantity, 1)

    def test_clear_removes_only_own_items(self):
        self._add()
        self._add(detail=self.other_detail)
        CartItem.objects.create(user=self.other, product=self.product, detail=self.detail, quantity=1)

        response = self.client.delete("/api/cart/clear/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["deleted"], 2)
        self.assertFalse(CartItem.objects.filter(user=self.user).exists())
        self.assertEqual(CartItem.objects.filter(user=self.other).count(), 1)
