from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.cart.domain.errors import CartItemNotFoundError, CartValidationError
from apps.cart.interfaces.api.serializers import CartAddSerializer, CartItemSerializer, CartUpdateSerializer
from apps.cart.services.cart_service import CartService
from clothing_store.api_errors import error_response


class CartListAPI(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        items = CartService.list_items(request.user.id)
        return Response(CartItemSerializer(items, many=True).data)

    def post(self, request):
        serializer = CartAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            item = CartService.add_item(
                user_id=request.user.id,
                product_id=data.get("product_id"),
                detail_id=data["detail_id"],
                quantity=data["quantity"],
            )
        except CartValidationError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)
        return Response(CartItemSerializer(item).data, status=status.HTTP_201_CREATED)


class CartCountAPI(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({"count": CartService.count_items(request.user.id)})


class CartClearAPI(APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request):
        deleted = CartService.clear(request.user.id)
        return Response({"success": True, "message": "Cart cleared", "deleted": deleted})


class CartItemAPI(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, item_id: int):
        try:
            item = CartService.get_item(request.user.id, item_id)
        except CartItemNotFoundError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        return Response(CartItemSerializer(item).data)

    def put(self, request, item_id: int):
        serializer = CartUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            item = CartService.update_quantity(
                user_id=request.user.id,
                item_id=item_id,
                quantity=serializer.validated_data["quantity"],
            )
        except CartItemNotFoundError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        return Response({"success": True, "message": "Cart item updated", "item": CartItemSerializer(item).data})

    def delete(self, request, item_id: int):
        try:
            CartService.remove_item(user_id=request.user.id, item_id=item_id)
        except CartItemNotFoundError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        return Response({"success": True, "message": "Cart item removed"})
