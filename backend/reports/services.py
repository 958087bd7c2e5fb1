"""
Analytics Aggregator: revenue and completion-time rollups over Order rows.

Everything here is a read query. Revenue excludes cancelled orders; completion
statistics only consider completed orders that carry a ``completed_at``.
Durations are minutes between ``datetime`` and ``completed_at``.
"""
import logging
import statistics
from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from django.conf import settings
from django.db.models import Count, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from core_backend.utils.money import quantize
from orders.models import Order

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 30
DEFAULT_TAX_RATE = Decimal("0.0825")

Status = Order.OrderStatus


class AnalyticsService:
    """Read-side rollups for the manager dashboard."""

    @staticmethod
    def tax_rate() -> Decimal:
        return Decimal(str(getattr(settings, "REVENUE_TAX_RATE", DEFAULT_TAX_RATE)))

    @staticmethod
    def window_days() -> int:
        return int(getattr(settings, "ANALYTICS_DEFAULT_WINDOW_DAYS", DEFAULT_WINDOW_DAYS))

    @staticmethod
    def resolve_window(
        day: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Tuple[date, date]:
        """
        Turn the query parameters into an inclusive ``(start, end)`` date range.

        A single ``day`` wins; otherwise both bounds must be given; otherwise the
        range is the last ``ANALYTICS_DEFAULT_WINDOW_DAYS`` days up to today.
        """
        if day is not None:
            return day, day
        if start_date is not None and end_date is not None:
            if start_date > end_date:
                raise ValueError("start_date must be on or before end_date")
            return start_date, end_date
        today = timezone.localdate()
        return today - timedelta(days=AnalyticsService.window_days()), today

    @staticmethod
    def _orders_in_window(start: date, end: date):
        return Order.objects.filter(datetime__date__gte=start, datetime__date__lte=end)

    @staticmethod
    def _revenue_orders(start: date, end: date):
        return AnalyticsService._orders_in_window(start, end).exclude(order_status=Status.CANCELLED)

    @staticmethod
    def _completed_orders(start: date, end: date):
        return AnalyticsService._orders_in_window(start, end).filter(
            order_status=Status.COMPLETED, completed_at__isnull=False
        )

    # ------------------------------------------------------------------
    # Revenue
    # ------------------------------------------------------------------

    @staticmethod
    def daily_revenue(day=None, start_date=None, end_date=None) -> List[Dict[str, Any]]:
        """Per-day sales totals, newest day first."""
        start, end = AnalyticsService.resolve_window(day, start_date, end_date)
        tax_rate = AnalyticsService.tax_rate()

        rows = (
            AnalyticsService._revenue_orders(start, end)
            .annotate(day=TruncDate("datetime"))
            .values("day")
            .annotate(total_sales=Sum("price"), order_count=Count("id"))
            .order_by("-day")
        )

        report = []
        for row in rows:
            total_sales = quantize(row["total_sales"])
            order_count = row["order_count"]
            total_tax = quantize(total_sales * tax_rate)
            report.append(
                {
                    "date": row["day"].isoformat(),
                    "total_sales": total_sales,
                    "order_count": order_count,
                    "average_order_value": (
                        quantize(total_sales / order_count) if order_count else quantize(0)
                    ),
                    "total_tax": total_tax,
                    "net_sales": total_sales - total_tax,
                }
            )

        logger.debug(f"Daily revenue {start}..{end}: {len(report)} day(s)")
        return report

    @staticmethod
    def revenue_summary(start_date=None, end_date=None) -> Dict[str, Any]:
        """Totals across the whole window."""
        start, end = AnalyticsService.resolve_window(None, start_date, end_date)
        orders = AnalyticsService._revenue_orders(start, end)

        totals = orders.aggregate(total_revenue=Sum("price"), total_orders=Count("id"))
        total_revenue = quantize(totals["total_revenue"])
        total_orders = totals["total_orders"] or 0
        days_count = (
            orders.annotate(day=TruncDate("datetime")).values("day").distinct().count()
        )

        return {
            "total_revenue": total_revenue,
            "total_orders": total_orders,
            "days_count": days_count,
            "average_daily_revenue": (
                quantize(total_revenue / days_count) if days_count else quantize(0)
            ),
            "average_order_value": (
                quantize(total_revenue / total_orders) if total_orders else quantize(0)
            ),
        }

    @staticmethod
    def orders_by_date(day: date):
        """Non-cancelled orders placed on ``day``, newest first."""
        return (
            Order.objects.filter(datetime__date=day)
            .exclude(order_status=Status.CANCELLED)
            .order_by("-datetime", "-id")
        )

    # ------------------------------------------------------------------
    # Completion time
    # ------------------------------------------------------------------

    @staticmethod
    def _completion_samples(start: date, end: date):
        """Yield ``(local placed-at datetime, minutes to complete)`` per completed order."""
        rows = AnalyticsService._completed_orders(start, end).values_list("datetime", "completed_at")
        for placed_at, completed_at in rows:
            minutes = (completed_at - placed_at).total_seconds() / 60
            yield timezone.localtime(placed_at), minutes

    @staticmethod
    def _stats(minutes: List[float]) -> Dict[str, Any]:
        return {
            "average_completion_time_minutes": round(statistics.fmean(minutes), 2),
            "order_count": len(minutes),
            "min_completion_time_minutes": round(min(minutes), 2),
            "max_completion_time_minutes": round(max(minutes), 2),
        }

    @staticmethod
    def completion_time_by_date(day=None, start_date=None, end_date=None) -> List[Dict[str, Any]]:
        """Average/min/max completion minutes per day, newest day first."""
        start, end = AnalyticsService.resolve_window(day, start_date, end_date)

        by_day = defaultdict(list)
        for placed_at, minutes in AnalyticsService._completion_samples(start, end):
            by_day[placed_at.date()].append(minutes)

        return [
            {"date": bucket.isoformat(), **AnalyticsService._stats(by_day[bucket])}
            for bucket in sorted(by_day, reverse=True)
        ]

    @staticmethod
    def hourly_completion_time(start_date=None, end_date=None) -> List[Dict[str, Any]]:
        """Average completion minutes by hour of day (0-23) the order was placed."""
        start, end = AnalyticsService.resolve_window(None, start_date, end_date)

        by_hour = defaultdict(list)
        for placed_at, minutes in AnalyticsService._completion_samples(start, end):
            by_hour[placed_at.hour].append(minutes)

        return [
            {
                "hour": hour,
                "average_completion_time_minutes": round(statistics.fmean(by_hour[hour]), 2),
                "order_count": len(by_hour[hour]),
            }
            for hour in sorted(by_hour)
        ]

    @staticmethod
    def completion_time_summary(start_date=None, end_date=None) -> Dict[str, Any]:
        """Overall completion statistics including the median."""
        start, end = AnalyticsService.resolve_window(None, start_date, end_date)
        minutes = [m for _placed_at, m in AnalyticsService._completion_samples(start, end)]

        if not minutes:
            return {
                "overall_average_minutes": 0,
                "total_completed_orders": 0,
                "fastest_order_minutes": 0,
                "slowest_order_minutes": 0,
                "median_minutes": 0,
            }

        return {
            "overall_average_minutes": round(statistics.fmean(minutes), 2),
            "total_completed_orders": len(minutes),
            "fastest_order_minutes": round(min(minutes), 2),
            "slowest_order_minutes": round(max(minutes), 2),
            "median_minutes": round(statistics.median(minutes), 2),
        }
