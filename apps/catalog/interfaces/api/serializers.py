from __future__ import annotations

from rest_framework import serializers

from apps.catalog.models import Category, Product, ProductDetail


class CategorySerializer(serializers.ModelSerializer):
    category_id = serializers.IntegerField(source="id", read_only=True)
    category_name = serializers.CharField(source="name")

    class Meta:
        model = Category
        fields = ["category_id", "category_name"]


class ProductSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(source="id", read_only=True)
    product_name = serializers.CharField(source="name")
    category_name = serializers.CharField(source="category.name", default=None, read_only=True)

    class Meta:
        model = Product
        fields = [
            "product_id",
            "product_name",
            "description",
            "price",
            "image_url",
            "category_id",
            "category_name",
            "created_at",
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    detail_id = serializers.IntegerField(source="id", read_only=True)

    class Meta:
        model = ProductDetail
        fields = ["detail_id", "product_id", "color", "size", "stock_quantity", "image_url"]


class VariantInputSerializer(serializers.Serializer):
    color = serializers.CharField(max_length=50, required=False, allow_blank=True)
    size = serializers.CharField(max_length=20, required=False, allow_blank=True)
    stock_quantity = serializers.IntegerField(min_value=0, default=0)
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True)


class ProductCreateSerializer(serializers.Serializer):
    product_name = serializers.CharField(max_length=255)
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    category_id = serializers.IntegerField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    image_url = serializers.URLField(max_length=500, required=False, allow_blank=True, default="")
    variants = VariantInputSerializer(many=True, required=False)


class StockUpdateSerializer(serializers.Serializer):
    stock_quantity = serializers.IntegerField(min_value=0)
