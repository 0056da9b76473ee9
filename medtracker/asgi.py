"""
ASGI config for medtracker project.

The API is plain request/response, so only Django's HTTP handler is
exposed; there are no WebSocket routes.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medtracker.settings")

application = get_asgi_application()
