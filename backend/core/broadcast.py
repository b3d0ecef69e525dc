"""core/broadcast.py — Live result fan-out to connected WebSocket clients.

Route handlers depend only on the Publisher capability (`publish(topic, payload)`).
BroadcastChannel is the concrete implementation: it owns the registry of live
subscribers, which the /ws/results endpoint (api/routers/live.py) adds to and
removes from. One channel is created per application in api/main.py and
reached through the get_broadcaster() dependency.

Delivery is best-effort:
  - one send attempt per subscriber per event, nothing awaited back
  - a subscriber whose send fails is dropped from the registry
  - subscribers that connect later get no replay
  - zero subscribers is not an error

Wire format of every message:
    {"event": "<topic>", "data": <payload>}
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from fastapi import WebSocket

logger = logging.getLogger(__name__)

RESULT_UPDATE = "resultUpdate"
RESULT_DELETE = "resultDelete"


class Publisher(Protocol):
    async def publish(self, topic: str, payload: Any) -> int:
        ...


class BroadcastChannel:
    """Registry of live WebSocket subscribers plus the publish fan-out."""

    def __init__(self) -> None:
        self._subscribers: set[WebSocket] = set()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._subscribers.add(websocket)
        logger.info("live subscriber connected", extra={"subscribers": self.subscriber_count})

    def disconnect(self, websocket: WebSocket) -> None:
        self._subscribers.discard(websocket)
        logger.info("live subscriber disconnected", extra={"subscribers": self.subscriber_count})

    async def publish(self, topic: str, payload: Any) -> int:
        """Send one event to every current subscriber; return how many got it."""
        message = {"event": topic, "data": payload}
        delivered = 0
        # Snapshot: connect/disconnect may run while we are awaiting sends
        for websocket in list(self._subscribers):
            try:
                await websocket.send_json(message)
            except Exception as exc:
                self._subscribers.discard(websocket)
                logger.warning(
                    "dropping live subscriber after failed send",
                    extra={"topic": topic, "error": str(exc)},
                )
            else:
                delivered += 1

        logger.debug(
            "broadcast published",
            extra={"topic": topic, "delivered": delivered, "subscribers": self.subscriber_count},
        )
        return delivered
