from __future__ import annotations

from rest_framework import serializers

from apps.cart.models import CartItem


class CartItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    price = serializers.DecimalField(source="product.price", max_digits=12, decimal_places=2, read_only=True)
    image_url = serializers.SerializerMethodField()
    color = serializers.CharField(source="detail.color", read_only=True)
    size = serializers.CharField(source="detail.size", read_only=True)
    stock_quantity = serializers.IntegerField(source="detail.stock_quantity", read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "user_id",
            "product_id",
            "detail_id",
            "quantity",
            "product_name",
            "price",
            "image_url",
            "color",
            "size",
            "stock_quantity",
            "created_at",
        ]

    def get_image_url(self, obj: CartItem) -> str:
        return obj.detail.image_url or obj.product.image_url


class CartAddSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(required=False, allow_null=True)
    detail_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class CartUpdateSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
