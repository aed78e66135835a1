from django.conf import settings
from django.db import models
from django.utils import timezone

from apps.orders.domain.status import OrderStatus


class Order(models.Model):
    STATUS_CHOICES = [(status.value, status.value.title()) for status in OrderStatus]

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="orders")
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    order_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=OrderStatus.PENDING.value)
    created_at = models.DateTimeField(default=timezone.now)
    is_deleted = models.BooleanField(default=False)

    def __str__(self) -> str:
        return f"Order #{self.pk} ({self.order_status})"

    class Meta:
        indexes = [
            models.Index(fields=["is_deleted", "created_at"], name="order_deleted_created_idx"),
            models.Index(fields=["is_deleted", "order_status"], name="order_deleted_status_idx"),
            models.Index(fields=["user", "created_at"], name="order_user_created_idx"),
        ]


class OrderDetail(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="details")
    detail = models.ForeignKey("catalog.ProductDetail", on_delete=models.PROTECT, related_name="order_lines")
    quantity = models.PositiveIntegerField()
    # Unit price captured at purchase time.
    price = models.DecimalField(max_digits=12, decimal_places=2)

    def __str__(self) -> str:
        return f"{self.order} - {self.detail} x{self.quantity}"

    @property
    def subtotal(self):
        return self.price * self.quantity
