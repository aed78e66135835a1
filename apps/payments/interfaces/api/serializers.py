from __future__ import annotations

from rest_framework import serializers

from apps.payments.models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    payment_id = serializers.IntegerField(source="id", read_only=True)

    class Meta:
        model = Payment
        fields = ["payment_id", "order_id", "method", "status", "amount", "reference", "created_at"]


class PaymentCreateSerializer(serializers.Serializer):
    order_id = serializers.IntegerField()
    method = serializers.CharField(max_length=30, required=False, default="cod")
