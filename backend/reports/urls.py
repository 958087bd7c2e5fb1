from django.urls import path
from . import views

app_name = "reports"

urlpatterns = [
    path("revenue/daily/", views.daily_revenue, name="revenue-daily"),
    path("revenue/summary/", views.revenue_summary, name="revenue-summary"),
    path("revenue/orders/<str:day>/", views.orders_by_date, name="revenue-orders-by-date"),
    path("analytics/completion-time/", views.completion_time, name="completion-time"),
    path(
        "analytics/completion-time/hourly/",
        views.hourly_completion_time,
        name="completion-time-hourly",
    ),
    path(
        "analytics/completion-time/summary/",
        views.completion_time_summary,
        name="completion-time-summary",
    ),
]
