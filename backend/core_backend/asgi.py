"""
ASGI config for core_backend project.

Requests are served synchronously; each order operation holds one pooled
database connection for the length of its transaction.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "core_backend.settings")

application = get_asgi_application()
