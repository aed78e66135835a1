from clothing_client.services.account import AccountService
from clothing_client.services.cart import CartService
from clothing_client.services.orders import OrderService
from clothing_client.services.payment import PaymentService
from clothing_client.services.products import ProductService, sort_products
from clothing_client.services.statistics import StatisticsService

__all__ = [
    "AccountService",
    "CartService",
    "OrderService",
    "PaymentService",
    "ProductService",
    "StatisticsService",
    "sort_products",
]
