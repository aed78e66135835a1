from django.conf import settings
from django.db import models
from django.utils import timezone


class CartItem(models.Model):
    """One cart line. Adding the same variant twice yields two rows."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cart_items")
    product = models.ForeignKey("catalog.Product", on_delete=models.CASCADE)
    detail = models.ForeignKey("catalog.ProductDetail", on_delete=models.CASCADE)
    quantity = models.PositiveIntegerField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        indexes = [
            models.Index(fields=["user", "created_at"], name="cart_item_user_time_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} - {self.detail} x{self.quantity}"
