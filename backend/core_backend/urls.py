"""
URL configuration for core_backend project.

Every app mounts under /api/. The orders app registers its own "orders"
prefix, so it is included at the api root.
"""

from django.contrib import admin
from django.urls import path, include

from .views import health_check


urlpatterns = [
    path("api/health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/", include("orders.urls")),  # This ensures the final path is /api/orders/
    path("api/inventory/", include("inventory.urls")),
    path("api/", include("reports.urls")),
]
