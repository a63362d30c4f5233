"""
Channels consumer for realtime messaging.

One websocket per browser tab.  The JWT middleware authenticates the
connection; the client then sends a ``join`` event to register itself
with the realtime relay so it can receive ``receive_message`` and
``user_typing`` events addressed to its user.  The consumer never reads
or writes the database: durable sends go through ``POST /api/messages/``.
"""
from __future__ import annotations

import logging
from typing import Any

from channels.generic.websocket import AsyncJsonWebsocketConsumer

from .relay import RECEIVE_MESSAGE, USER_TYPING, get_relay
from .serializers import JoinEventSerializer, SocketMessageEventSerializer, TypingEventSerializer

logger = logging.getLogger(__name__)


class MessagingConsumer(AsyncJsonWebsocketConsumer):
    """Realtime WebSocket consumer keyed by user id."""

    async def connect(self) -> None:
        self.user_id = None
        user = self.scope.get("user")
        if not user or not user.is_authenticated:
            await self.close(code=4401)
            return
        await self.accept()

    async def disconnect(self, code: int) -> None:
        left = get_relay().leave(self.channel_name)
        if left is not None:
            logger.info("User %s disconnected (code=%s)", left, code)

    async def receive_json(self, content: Any, **kwargs: Any) -> None:
        if not isinstance(content, dict):
            await self._error("Expected a JSON object.")
            return
        event_type = content.get("type")
        if event_type == "join":
            await self._handle_join(content)
            return
        if event_type not in ("send_message", "typing"):
            await self._error(f"Unknown event type: {event_type!r}.")
            return
        if self.user_id is None:
            await self._error("Send a join event first.")
            return
        if event_type == "send_message":
            await self._handle_send(content)
        else:
            await self._handle_typing(content)

    # ---------- client events ----------
    async def _handle_join(self, content: dict) -> None:
        ser = JoinEventSerializer(data=content)
        if not ser.is_valid():
            await self._error(ser.errors)
            return
        user_id = ser.validated_data["userId"]
        if user_id != self.scope["user"].id:
            await self._error("Cannot join as another user.")
            return
        get_relay().join(user_id, self.channel_name)
        self.user_id = user_id
        logger.info("User %s joined on %s", user_id, self.channel_name)
        await self.send_json({"type": "joined", "userId": user_id})

    async def _handle_send(self, content: dict) -> None:
        ser = SocketMessageEventSerializer(data=content)
        if not ser.is_valid():
            await self._error(ser.errors)
            return
        await get_relay().relay(
            RECEIVE_MESSAGE,
            ser.validated_data["receiverId"],
            {"message": {**ser.validated_data["message"], "senderId": self.user_id}},
        )

    async def _handle_typing(self, content: dict) -> None:
        ser = TypingEventSerializer(data=content)
        if not ser.is_valid():
            await self._error(ser.errors)
            return
        await get_relay().relay(
            USER_TYPING,
            ser.validated_data["receiverId"],
            {"isTyping": ser.validated_data["isTyping"], "userId": self.user_id},
        )

    # ---------- channel layer events ----------
    async def relay_event(self, event: dict[str, Any]) -> None:
        await self.send_json({"type": event["event"], **event["payload"]})

    async def _error(self, detail) -> None:
        await self.send_json({"type": "error", "detail": detail})
