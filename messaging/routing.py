"""
WebSocket routing for the messaging app.

Exposes a single URL per client.  The JWT authentication middleware
sets the scope user and the consumer rejects anonymous connections.
"""
from django.urls import re_path

from .consumers import MessagingConsumer


websocket_urlpatterns = [
    re_path(r"^ws/messages/$", MessagingConsumer.as_asgi()),
]
