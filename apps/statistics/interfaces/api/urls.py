from django.urls import path

from .views import (
    DashboardStatisticsAPI,
    MonthlyRevenueAPI,
    OrderStatusDistributionAPI,
    RecentOrdersAPI,
    RevenueByCategoryAPI,
    TopProductsAPI,
)

urlpatterns = [
    path("dashboard/", DashboardStatisticsAPI.as_view(), name="statistics-dashboard"),
    path("monthly-revenue/", MonthlyRevenueAPI.as_view(), name="statistics-monthly-revenue"),
    path(
        "order-status-distribution/",
        OrderStatusDistributionAPI.as_view(),
        name="statistics-order-status-distribution",
    ),
    path("revenue-by-category/", RevenueByCategoryAPI.as_view(), name="statistics-revenue-by-category"),
    path("top-products/", TopProductsAPI.as_view(), name="statistics-top-products"),
    path("recent-orders/", RecentOrdersAPI.as_view(), name="statistics-recent-orders"),
]
