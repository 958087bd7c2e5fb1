import logging

from django.utils.dateparse import parse_date
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from .serializers import OrderBreakdownSerializer, ReportParameterSerializer
from .services import AnalyticsService

logger = logging.getLogger(__name__)


def _report_params(request):
    serializer = ReportParameterSerializer(data=request.query_params)
    serializer.is_valid(raise_exception=True)
    return serializer.validated_data


@api_view(["GET"])
def daily_revenue(request):
    """Per-day sales, tax and net for ?date= or ?start_date=&end_date= (default: last 30 days)."""
    params = _report_params(request)
    data = AnalyticsService.daily_revenue(
        day=params.get("date"),
        start_date=params.get("start_date"),
        end_date=params.get("end_date"),
    )
    return Response({"success": True, "data": data})


@api_view(["GET"])
def revenue_summary(request):
    params = _report_params(request)
    data = AnalyticsService.revenue_summary(
        start_date=params.get("start_date"), end_date=params.get("end_date")
    )
    return Response({"success": True, "data": data})


@api_view(["GET"])
def orders_by_date(request, day):
    """Every non-cancelled order placed on one day."""
    try:
        parsed = parse_date(day)
    except ValueError:
        parsed = None
    if parsed is None:
        return Response(
            {"success": False, "error": "A valid date (YYYY-MM-DD) is required"},
            status=status.HTTP_400_BAD_REQUEST,
        )
    orders = AnalyticsService.orders_by_date(parsed)
    return Response({"success": True, "data": OrderBreakdownSerializer(orders, many=True).data})


@api_view(["GET"])
def completion_time(request):
    params = _report_params(request)
    data = AnalyticsService.completion_time_by_date(
        day=params.get("date"),
        start_date=params.get("start_date"),
        end_date=params.get("end_date"),
    )
    return Response({"success": True, "data": data})


@api_view(["GET"])
def hourly_completion_time(request):
    params = _report_params(request)
    data = AnalyticsService.hourly_completion_time(
        start_date=params.get("start_date"), end_date=params.get("end_date")
    )
    return Response({"success": True, "data": data})


@api_view(["GET"])
def completion_time_summary(request):
    params = _report_params(request)
    data = AnalyticsService.completion_time_summary(
        start_date=params.get("start_date"), end_date=params.get("end_date")
    )
    return Response({"success": True, "data": data})
