from django.urls import path
from . import views

app_name = "inventory"

urlpatterns = [
    path("low-stock/", views.low_stock, name="low-stock"),
    path("restock-report/", views.restock_report, name="restock-report"),
]
