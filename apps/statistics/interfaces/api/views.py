from __future__ import annotations

import logging

from django.db import DatabaseError
from django.utils import timezone
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.interfaces.api.permissions import IsStoreAdmin
from apps.statistics.domain.params import parse_date_range, parse_limit, parse_year
from apps.statistics.services.statistics_service import StatisticsService
from clothing_store.api_errors import error_response

logger = logging.getLogger("clothing.statistics")


class _StatisticsAPI(APIView):
    permission_classes = [IsStoreAdmin]
    failure_message = "Error fetching statistics"

    def compute(self, request):
        raise NotImplementedError

    def get(self, request):
        try:
            payload = self.compute(request)
        except DatabaseError as exc:
            logger.exception("%s failed", type(self).__name__)
            return error_response(message=self.failure_message, error=str(exc))
        return Response(payload)


class DashboardStatisticsAPI(_StatisticsAPI):
    failure_message = "Error fetching dashboard statistics"

    def compute(self, request):
        date_range = parse_date_range(
            request.query_params.get("start_date"),
            request.query_params.get("end_date"),
        )
        return StatisticsService.dashboard(date_range)


class MonthlyRevenueAPI(_StatisticsAPI):
    failure_message = "Error fetching monthly revenue"

    def compute(self, request):
        year = parse_year(request.query_params.get("year"), default=timezone.localdate().year)
        return StatisticsService.monthly_revenue(year)


class OrderStatusDistributionAPI(_StatisticsAPI):
    failure_message = "Error fetching order status distribution"

    def compute(self, request):
        return StatisticsService.order_status_distribution()


class RevenueByCategoryAPI(_StatisticsAPI):
    failure_message = "Error fetching revenue by category"

    def compute(self, request):
        return StatisticsService.revenue_by_category()


class TopProductsAPI(_StatisticsAPI):
    failure_message = "Error fetching top products"

    def compute(self, request):
        return StatisticsService.top_products(parse_limit(request.query_params.get("limit")))


class RecentOrdersAPI(_StatisticsAPI):
    failure_message = "Error fetching recent orders"

    def compute(self, request):
        return StatisticsService.recent_orders(
            limit=parse_limit(request.query_params.get("limit")),
            sort=request.query_params.get("sort"),
            order=request.query_params.get("order"),
        )
