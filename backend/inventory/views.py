from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
import logging

from .serializers import InventoryItemSerializer
from .services import InventoryService

logger = logging.getLogger(__name__)


@api_view(["GET"])
def low_stock(request):
    """Items flagged for reorder."""
    items = InventoryService.get_low_stock_items()
    return Response({"success": True, "data": InventoryItemSerializer(items, many=True).data})


@api_view(["GET"])
def restock_report(request):
    """Items with stock under the restock threshold (overridable with ?threshold=)."""
    threshold = request.query_params.get("threshold")
    if threshold is not None:
        try:
            threshold = int(threshold)
        except ValueError:
            return Response(
                {"success": False, "error": "threshold must be an integer"},
                status=status.HTTP_400_BAD_REQUEST,
            )
    items = InventoryService.get_restock_report(threshold)
    return Response({"success": True, "data": InventoryItemSerializer(items, many=True).data})
