from django.urls import path

from .views import CheckoutAPI, OrderDetailCreateAPI, OrderDetailListAPI, OrderItemAPI, OrderListAPI

urlpatterns = [
    path("orders/", OrderListAPI.as_view(), name="api_orders"),
    path("orders/<int:order_id>/", OrderItemAPI.as_view(), name="api_order"),
    path("order_details/", OrderDetailCreateAPI.as_view(), name="api_order_details"),
    path("order_details/order/<int:order_id>/", OrderDetailListAPI.as_view(), name="api_order_detail_list"),
    path("checkout/", CheckoutAPI.as_view(), name="api_checkout"),
]
