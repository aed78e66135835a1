from django.urls import path

from .views import PaymentListAPI, PaymentMethodListAPI

urlpatterns = [
    path("payments/", PaymentListAPI.as_view(), name="api_payments"),
    path("payments/methods/", PaymentMethodListAPI.as_view(), name="api_payment_methods"),
]
