"""
Per-process registry of connected users and best-effort push.

Each websocket consumer registers its Channels ``channel_name`` under the
authenticated user id after the ``join`` event.  Services and consumers
then push events to a user by id; a user with no live connection simply
misses the push, the message itself is already stored.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional

from asgiref.sync import async_to_sync
from channels.exceptions import ChannelFull
from channels.layers import get_channel_layer
from django.apps import apps

logger = logging.getLogger(__name__)

RECEIVE_MESSAGE = "receive_message"
USER_TYPING = "user_typing"


class RealtimeRelay:
    """Maps user ids to channel names, last connection wins."""

    def __init__(self, channel_layer=None) -> None:
        self._channel_layer = channel_layer
        self._handles: Dict[int, str] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)

    @property
    def channel_layer(self):
        if self._channel_layer is None:
            self._channel_layer = get_channel_layer()
        return self._channel_layer

    def join(self, user_id: int, handle: str) -> Optional[str]:
        """Register ``handle`` for ``user_id`` and return the handle it replaced."""
        with self._lock:
            previous = self._handles.get(user_id)
            self._handles[user_id] = handle
        if previous and previous != handle:
            logger.debug("User %s reconnected, replacing %s", user_id, previous)
        return previous

    def leave(self, handle: str) -> Optional[int]:
        """Forget ``handle``; an entry already taken over by a newer handle is kept."""
        with self._lock:
            for user_id, current in self._handles.items():
                if current == handle:
                    del self._handles[user_id]
                    return user_id
        return None

    def handle_for(self, user_id: int) -> Optional[str]:
        with self._lock:
            return self._handles.get(user_id)

    def is_connected(self, user_id: int) -> bool:
        return self.handle_for(user_id) is not None

    def close(self) -> None:
        with self._lock:
            count = len(self._handles)
            self._handles.clear()
        logger.info("Realtime relay closed, dropped %d connection(s)", count)

    async def relay(self, event: str, recipient_id: int, payload: Dict[str, Any]) -> bool:
        """
        Push ``event`` to the recipient's live connection.

        Returns ``False`` when the recipient is not connected or the
        channel is full; nothing is retried or queued.
        """
        handle = self.handle_for(recipient_id)
        if handle is None:
            logger.debug("Relay %s to user %s skipped: not connected", event, recipient_id)
            return False
        try:
            await self.channel_layer.send(
                handle,
                {"type": "relay.event", "event": event, "payload": payload},
            )
        except ChannelFull:
            logger.warning("Relay %s to user %s dropped: channel full", event, recipient_id)
            return False
        return True

    def relay_sync(self, event: str, recipient_id: int, payload: Dict[str, Any]) -> bool:
        return async_to_sync(self.relay)(event, recipient_id, payload)


def get_relay() -> RealtimeRelay:
    return apps.get_app_config("messaging").relay
