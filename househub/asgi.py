"""
ASGI entry point for Django Channels.

This file configures the HTTP, WebSocket and lifespan protocols by
composing the Django ASGI application and Channels routing.  The default
settings module is the development configuration.  Lifespan shutdown
tears down the realtime relay so no stale connection handles outlive the
process state they belonged to.
"""

import logging
import os
import django

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "househub.settings.dev")
django.setup()
from django.conf import settings
from django.core.asgi import get_asgi_application
from django.contrib.staticfiles.handlers import ASGIStaticFilesHandler

from channels.routing import ProtocolTypeRouter, URLRouter
from channels.security.websocket import AllowedHostsOriginValidator

from common.channels_jwt_auth import JWTAuthMiddlewareStack
from househub.routing import websocket_urlpatterns
from messaging.relay import get_relay

logger = logging.getLogger(__name__)

django_asgi_app = get_asgi_application()

# Serve /static/ when using uvicorn in DEBUG mode
if settings.DEBUG:
    django_asgi_app = ASGIStaticFilesHandler(django_asgi_app)


async def lifespan_app(scope, receive, send):
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            relay = get_relay()
            logger.info("Realtime relay ready (%d connections)", len(relay))
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            get_relay().close()
            await send({"type": "lifespan.shutdown.complete"})
            return


application = ProtocolTypeRouter({
    "http": django_asgi_app,
    "websocket": AllowedHostsOriginValidator(
        JWTAuthMiddlewareStack(
            URLRouter(websocket_urlpatterns)
        )
    ),
    "lifespan": lifespan_app,
})
