from django.db import models
from django.utils import timezone


class Category(models.Model):
    name = models.CharField(max_length=255)
    is_deleted = models.BooleanField(default=False)

    class Meta:
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name


class Product(models.Model):
    category = models.ForeignKey(
        Category, null=True, blank=True, on_delete=models.SET_NULL, related_name="products"
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=12, decimal_places=2)
    image_url = models.URLField(max_length=500, blank=True, default="")
    is_deleted = models.BooleanField(default=False)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["is_deleted", "created_at"], name="catalog_product_listing_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class ProductDetail(models.Model):
    """A sellable variant (color/size) of a product with its own stock."""

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name="details")
    color = models.CharField(max_length=50, blank=True, default="")
    size = models.CharField(max_length=20, blank=True, default="")
    stock_quantity = models.PositiveIntegerField(default=0)
    image_url = models.URLField(max_length=500, blank=True, default="")
    is_deleted = models.BooleanField(default=False)

    def __str__(self) -> str:
        return f"{self.product} - {self.color}/{self.size} qty={self.stock_quantity}"

    @property
    def in_stock(self) -> bool:
        return self.stock_quantity > 0
