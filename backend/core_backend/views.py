from django.db import connection
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
import logging

logger = logging.getLogger(__name__)


@api_view(["GET"])
def health_check(request):
    """Health check that also verifies the database is reachable."""
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        return Response({"success": True, "data": {"status": "ok", "database": "ok"}})
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return Response(
            {"success": False, "error": "Database unavailable"},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
