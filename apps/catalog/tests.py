from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from apps.catalog.models import Category, Product, ProductDetail
from apps.catalog.services.product_service import ProductService


class CatalogApiTests(TestCase):
    def setUp(self) -> None:
        super().setUp()
        self.client = APIClient()
        now = timezone.now()
        self.shirts = Category.objects.create(name="Shirts")
        self.pants = Category.objects.create(name="Pants")
        Category.objects.create(name="Retired", is_deleted=True)
        self.cheap = Product.objects.create(
            category=self.shirts, name="Tee", price=Decimal("100.00"), created_at=now - timedelta(days=3)
        )
        self.pricey = Product.objects.create(
            category=self.pants, name="Chinos", price=Decimal("300.00"), created_at=now - timedelta(days=1)
        )
        self.mid = Product.objects.create(
            category=self.shirts, name="Polo", price=Decimal("200.00"), created_at=now - timedelta(days=2)
        )
        Product.objects.create(category=self.shirts, name="Hidden", price=Decimal("50.00"), is_deleted=True)
        ProductDetail.objects.create(product=self.cheap, color="white", size="M", stock_quantity=4)
        ProductDetail.objects.create(product=self.cheap, color="black", size="L", stock_quantity=0)
        ProductDetail.objects.create(product=self.cheap, color="red", size="S", stock_quantity=9, is_deleted=True)

    def test_categories_exclude_deleted(self):
        response = self.client.get("/api/categories/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([c["category_name"] for c in response.json()], ["Pants", "Shirts"])

    def test_products_exclude_deleted_and_sort(self):
        response = self.client.get("/api/products/", {"sort": "low-to-high"})
        self.assertEqual([p["product_name"] for p in response.json()], ["Tee", "Polo", "Chinos"])

        response = self.client.get("/api/products/", {"sort": "high-to-low"})
        self.assertEqual([p["product_name"] for p in response.json()], ["Chinos", "Polo", "Tee"])

        response = self.client.get("/api/products/", {"sort": "newest"})
        self.assertEqual([p["product_name"] for p in response.json()], ["Chinos", "Polo", "Tee"])

        response = self.client.get("/api/products/", {"sort": "bogus"})
        self.assertEqual([p["product_name"] for p in response.json()], ["Tee", "Chinos", "Polo"])

    def test_products_filter_by_category(self):
        response = self.client.get("/api/products/", {"category_id": self.shirts.id})
        names = {p["product_name"] for p in response.json()}
        self.assertEqual(names, {"Tee", "Polo"})

    def test_product_payload_shape(self):
        response = self.client.get(f"/api/products/{self.cheap.id}/")
        self.assertEqual(response.status_code, 200)
        payload = response.json()
        self.assertEqual(payload["product_id"], self.cheap.id)
        self.assertEqual(payload["category_name"], "Shirts")
        self.assertEqual(payload["price"], 100.0)

    def test_missing_product_is_404(self):
        hidden = Product.objects.get(name="Hidden")
        response = self.client.get(f"/api/products/{hidden.id}/")
        self.assertEqual(response.status_code, 404)
        self.assertFalse(response.json()["success"])

    def test_variants_exclude_deleted(self):
        response = self.client.get(f"/api/product_details/product/{self.cheap.id}/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([(d["color"], d["stock_quantity"]) for d in response.json()], [("white", 4), ("black", 0)])

    def test_create_product_requires_admin(self):
        response = self.client.post("/api/products/", {"product_name": "Cap", "price": "10.00"}, format="json")
        self.assertEqual(response.status_code, 401)

        user = get_user_model().objects.create_user(username="c@example.com", email="c@example.com", password="x")
        self.client.force_authenticate(user=user)
        response = self.client.post("/api/products/", {"product_name": "Cap", "price": "10.00"}, format="json")
        self.assertEqual(response.status_code, 403)

    def test_admin_creates_product_with_variants_and_sets_stock(self):
        admin = get_user_model().objects.create_user(
            username="admin@example.com", email="admin@example.com", password="x", is_staff=True
        )
        self.client.force_authenticate(user=admin)
        response = self.client.post(
            "/api/products/",
            {
                "product_name": "Cap",
                "price": "15.50",
                "category_id": self.shirts.id,
                "variants": [{"color": "blue", "size": "F", "stock_quantity": 3}],
            },
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        product = Product.objects.get(pk=response.json()["product_id"])
        detail = product.details.get()
        self.assertEqual(detail.stock_quantity, 3)

        response = self.client.patch(
            f"/api/product_details/{detail.id}/stock/", {"stock_quantity": 11}, format="json"
        )
        self.assertEqual(response.status_code, 200)
        detail.refresh_from_db()
        self.assertEqual(detail.stock_quantity, 11)

    def test_admin_soft_deletes_product(self):
        admin = get_user_model().objects.create_user(
            username="admin@example.com", email="admin@example.com", password="x", is_staff=True
        )
        self.client.force_authenticate(user=admin)
        response = self.client.delete(f"/api/products/{self.mid.id}/")
        self.assertEqual(response.status_code, 200)
        self.mid.refresh_from_db()
        self.assertTrue(self.mid.is_deleted)


class ProductServiceTests(TestCase):
    def test_create_product_rejects_non_positive_price(self):
        from apps.catalog.domain.errors import CatalogValidationError

        with self.assertRaises(CatalogValidationError):
            ProductService.create_product(name="Free", price=Decimal("0"))

    def test_create_product_rejects_deleted_category(self):
        from apps.catalog.domain.errors import CatalogValidationError

        category = Category.objects.create(name="Gone", is_deleted=True)
        with self.assertRaises(CatalogValidationError):
            ProductService.create_product(name="Thing", price=Decimal("5"), category_id=category.id)
