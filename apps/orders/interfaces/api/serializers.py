from __future__ import annotations

from rest_framework import serializers

from apps.orders.models import Order, OrderDetail


class OrderSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(source="id", read_only=True)

    class Meta:
        model = Order
        fields = ["order_id", "user_id", "total_price", "order_status", "created_at"]


class OrderDetailSerializer(serializers.ModelSerializer):
    order_detail_id = serializers.IntegerField(source="id", read_only=True)
    product_id = serializers.IntegerField(source="detail.product_id", read_only=True)
    product_name = serializers.CharField(source="detail.product.name", read_only=True)
    color = serializers.CharField(source="detail.color", read_only=True)
    size = serializers.CharField(source="detail.size", read_only=True)
    image_url = serializers.SerializerMethodField()

    class Meta:
        model = OrderDetail
        fields = [
            "order_detail_id",
            "order_id",
            "detail_id",
            "product_id",
            "product_name",
            "color",
            "size",
            "image_url",
            "quantity",
            "price",
        ]

    def get_image_url(self, obj: OrderDetail) -> str:
        return obj.detail.image_url or obj.detail.product.image_url


class OrderCreateSerializer(serializers.Serializer):
    user_id = serializers.IntegerField(required=False, min_value=1)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)


class OrderStatusUpdateSerializer(serializers.Serializer):
    order_status = serializers.CharField(max_length=20)


class OrderDetailCreateSerializer(serializers.Serializer):
    order_id = serializers.IntegerField()
    detail_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.DecimalField(max_digits=12, decimal_places=2)


class CheckoutSerializer(serializers.Serializer):
    payment_method = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
