"""
ASGI config for the mch project.

The console is plain HTTP; there are no WebSocket routes.
"""
import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "mch.settings")

application = get_asgi_application()
