from django.urls import path

from .views import CartClearAPI, CartCountAPI, CartItemAPI, CartListAPI

urlpatterns = [
    path("cart/", CartListAPI.as_view(), name="api_cart"),
    path("cart/count/", CartCountAPI.as_view(), name="api_cart_count"),
    path("cart/clear/", CartClearAPI.as_view(), name="api_cart_clear"),
    path("cart/<int:item_id>/", CartItemAPI.as_view(), name="api_cart_item"),
]
