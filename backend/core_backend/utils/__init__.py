"""
Utility functions for core_backend.
"""


def get_client_ip(request):
    """
    Extract the client IP from the request.

    Uses the LAST entry of X-Forwarded-For (the one appended by our own proxy)
    and falls back to REMOTE_ADDR.
    """
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[-1].strip()

    return request.META.get('REMOTE_ADDR')
