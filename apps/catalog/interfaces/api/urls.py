from django.urls import path

from .views import (
    CategoryListAPI,
    ProductListAPI,
    ProductRetrieveAPI,
    ProductVariantListAPI,
    ProductVariantStockAPI,
)

urlpatterns = [
    path("categories/", CategoryListAPI.as_view(), name="api_categories"),
    path("products/", ProductListAPI.as_view(), name="api_products"),
    path("products/<int:product_id>/", ProductRetrieveAPI.as_view(), name="api_product_detail"),
    path(
        "product_details/product/<int:product_id>/",
        ProductVariantListAPI.as_view(),
        name="api_product_variants",
    ),
    path(
        "product_details/<int:detail_id>/stock/",
        ProductVariantStockAPI.as_view(),
        name="api_product_variant_stock",
    ),
]
