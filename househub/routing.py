"""
Project-level Channels routing configuration.

This module collects the websocket URL routes of every app.  The ASGI
application wraps them with the JWT authentication middleware.
"""
from messaging.routing import websocket_urlpatterns as messaging_ws

websocket_urlpatterns = [
    *messaging_ws,
]
