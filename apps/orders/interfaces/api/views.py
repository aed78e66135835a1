from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.interfaces.api.permissions import IsStoreAdmin, is_store_admin
from apps.orders.application.use_cases.place_order import PlaceOrderCommand, PlaceOrderUseCase
from apps.orders.domain.errors import (
    EmptyCartError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    OrderPermissionError,
    OrderValidationError,
)
from apps.orders.interfaces.api.serializers import (
    CheckoutSerializer,
    OrderCreateSerializer,
    OrderDetailCreateSerializer,
    OrderDetailSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
)
from apps.orders.services.order_service import OrderService
from apps.payments.domain.errors import PaymentDomainError
from apps.payments.interfaces.api.serializers import PaymentSerializer
from clothing_store.api_errors import error_response


def _not_found(exc: Exception) -> Response:
    return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)


class OrderListAPI(APIView):
    def get_permissions(self):
        if self.request.method == "POST":
            return [IsStoreAdmin()]
        return [IsAuthenticated()]

    def get(self, request):
        orders = OrderService.list_orders(user_id=request.user.id)
        return Response(OrderSerializer(orders, many=True).data)

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = OrderService.create_order(
                user_id=serializer.validated_data.get("user_id") or request.user.id,
                total_price=serializer.validated_data["total_price"],
            )
        except OrderValidationError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderItemAPI(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id: int):
        try:
            order = OrderService.get_order(
                user_id=request.user.id, order_id=order_id, is_admin=is_store_admin(request.user)
            )
        except OrderNotFoundError as exc:
            return _not_found(exc)
        return Response(OrderSerializer(order).data)

    def put(self, request, order_id: int):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            order = OrderService.change_status(
                user_id=request.user.id,
                order_id=order_id,
                target=serializer.validated_data["order_status"],
                is_admin=is_store_admin(request.user),
            )
        except OrderNotFoundError as exc:
            return _not_found(exc)
        except OrderPermissionError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_403_FORBIDDEN)
        except InvalidStatusTransitionError as exc:
            return error_response(message=str(exc), field="order_status", http_status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True, "message": "Order updated", "order": OrderSerializer(order).data})

    def delete(self, request, order_id: int):
        try:
            OrderService.soft_delete(
                user_id=request.user.id, order_id=order_id, is_admin=is_store_admin(request.user)
            )
        except OrderNotFoundError as exc:
            return _not_found(exc)
        return Response({"success": True, "message": "Order deleted"})


class OrderDetailCreateAPI(APIView):
    permission_classes = [IsStoreAdmin]

    def post(self, request):
        serializer = OrderDetailCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            line = OrderService.add_detail(
                user_id=request.user.id,
                order_id=data["order_id"],
                detail_id=data["detail_id"],
                quantity=data["quantity"],
                price=data["price"],
                is_admin=is_store_admin(request.user),
            )
        except OrderNotFoundError as exc:
            return _not_found(exc)
        except OrderValidationError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)
        return Response(OrderDetailSerializer(line).data, status=status.HTTP_201_CREATED)


class OrderDetailListAPI(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, order_id: int):
        try:
            lines = OrderService.list_details(
                user_id=request.user.id, order_id=order_id, is_admin=is_store_admin(request.user)
            )
        except OrderNotFoundError as exc:
            return _not_found(exc)
        return Response(OrderDetailSerializer(lines, many=True).data)


class CheckoutAPI(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            result = PlaceOrderUseCase.execute(
                PlaceOrderCommand(
                    user_id=request.user.id,
                    payment_method=serializer.validated_data.get("payment_method", ""),
                )
            )
        except EmptyCartError as exc:
            return error_response(message=str(exc), field="cart", http_status=status.HTTP_400_BAD_REQUEST)
        except (OrderValidationError, PaymentDomainError) as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "success": True,
                "message": "Order placed successfully!",
                "order": OrderSerializer(result.order).data,
                "details": OrderDetailSerializer(
                    result.order.details.select_related("detail__product").order_by("id"), many=True
                ).data,
                "payment": PaymentSerializer(result.payment).data,
                "subtotal": result.subtotal,
                "shipping_fee": result.shipping_fee,
            },
            status=status.HTTP_201_CREATED,
        )
