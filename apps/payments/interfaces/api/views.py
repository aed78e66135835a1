from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.orders.domain.errors import OrderNotFoundError
from apps.payments.application.facade import PaymentGatewayFacade
from apps.payments.application.use_cases.record_payment import RecordPaymentCommand, RecordPaymentUseCase
from apps.payments.domain.errors import PaymentDomainError
from apps.payments.interfaces.api.serializers import PaymentCreateSerializer, PaymentSerializer
from apps.payments.models import Payment
from clothing_store.api_errors import error_response


class PaymentListAPI(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        payments = (
            Payment.objects.filter(order__user=request.user, order__is_deleted=False)
            .order_by("-created_at", "-id")
        )
        return Response(PaymentSerializer(payments, many=True).data)

    def post(self, request):
        serializer = PaymentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            payment = RecordPaymentUseCase.execute(
                RecordPaymentCommand(
                    user_id=request.user.id,
                    order_id=serializer.validated_data["order_id"],
                    method=serializer.validated_data["method"],
                )
            )
        except OrderNotFoundError as exc:
            return error_response(message=str(exc), http_status=status.HTTP_404_NOT_FOUND)
        except PaymentDomainError as exc:
            return error_response(message=str(exc), field=exc.field, http_status=status.HTTP_400_BAD_REQUEST)
        return Response(PaymentSerializer(payment).data, status=status.HTTP_201_CREATED)


class PaymentMethodListAPI(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(PaymentGatewayFacade.available_methods())
