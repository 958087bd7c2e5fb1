"""
Project-wide DRF exception handler.

Wraps every error response produced by DRF in the same envelope the views use
for success: ``{"success": false, "error": ...}``.
"""
from rest_framework.views import exception_handler
import logging

from core_backend.utils import get_client_ip

logger = logging.getLogger(__name__)


def envelope_exception_handler(exc, context):
    """
    Call DRF's default handler, then reshape its payload.

    Exceptions DRF does not know about return None and propagate as a 500.
    """
    response = exception_handler(exc, context)

    if response is None:
        return None

    response.data = {
        "success": False,
        "error": _flatten_error(response.data),
        "details": response.data,
    }

    request = context.get("request")
    if request is not None:
        logger.info(
            f"API error: {exc.__class__.__name__}",
            extra={
                "status_code": response.status_code,
                "path": request.path,
                "method": request.method,
                "ip": get_client_ip(request),
            },
        )

    return response


def _flatten_error(data):
    """Pick a single human readable message out of a DRF error payload."""
    if isinstance(data, dict):
        if "detail" in data:
            return str(data["detail"])
        for field, value in data.items():
            message = _flatten_error(value)
            if field == "non_field_errors":
                return message
            return f"{field}: {message}"
        return "Invalid request"
    if isinstance(data, list):
        return _flatten_error(data[0]) if data else "Invalid request"
    return str(data)
