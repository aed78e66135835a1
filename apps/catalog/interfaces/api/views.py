from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.interfaces.api.permissions import IsStoreAdmin
from apps.catalog.domain.errors import (
    CatalogValidationError,
    ProductDetailNotFoundError,
    ProductNotFoundError,
)
from apps.catalog.interfaces.api.serializers import (
    CategorySerializer,
    ProductCreateSerializer,
    ProductDetailSerializer,
    ProductSerializer,
    StockUpdateSerializer,
)
from apps.catalog.services.inventory_service import InventoryService
from apps.catalog.services.product_service import ProductService
from clothing_store.api_errors import error_response


def _optional_int(raw) -> int | None:
    try:
        return int(raw) if raw not in (None, "") else None
    except (TypeError, ValueError):
        return None


class CategoryListAPI(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        categories = ProductService.active_categories()
        return Response(CategorySerializer(categories, many=True).data)


class ProductListAPI(APIView):
    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsStoreAdmin()]

    def get(self, request):
        products = ProductService.list_products(
            category_id=_optional_int(request.query_params.get("category_id")),
            sort=request.query_params.get("sort"),
        )
        return Response(ProductSerializer(products, many=True).data)

    def post(self, request):
        serializer = ProductCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            product = ProductService.create_product(
                name=data["product_name"],
                price=data["price"],
                category_id=data.get("category_id"),
                description=data.get("description", ""),
                image_url=data.get("image_url", ""),
                variants=data.get("variants"),
            )
        except CatalogValidationError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)


class ProductRetrieveAPI(APIView):
    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsStoreAdmin()]

    def get(self, request, product_id: int):
        try:
            product = ProductService.get_product(product_id)
        except ProductNotFoundError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        return Response(ProductSerializer(product).data)

    def delete(self, request, product_id: int):
        try:
            ProductService.soft_delete_product(product_id)
        except ProductNotFoundError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        return Response({"success": True, "message": "Product deleted"})


class ProductVariantListAPI(APIView):
    permission_classes = [AllowAny]

    def get(self, request, product_id: int):
        try:
            details = ProductService.list_details(product_id)
        except ProductNotFoundError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        return Response(ProductDetailSerializer(details, many=True).data)


class ProductVariantStockAPI(APIView):
    permission_classes = [IsStoreAdmin]

    def patch(self, request, detail_id: int):
        serializer = StockUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            detail = ProductService.get_detail(detail_id)
            detail = InventoryService.set_stock(detail, serializer.validated_data["stock_quantity"])
        except ProductDetailNotFoundError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        except CatalogValidationError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)
        return Response(ProductDetailSerializer(detail).data)
