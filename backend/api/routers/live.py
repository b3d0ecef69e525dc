"""api/routers/live.py — WebSocket endpoint for live result updates.

Routes (mounted at root, no /api/v1 prefix):
    WS /ws/results     Subscribe to resultUpdate / resultDelete events

Clients only listen. A text "ping" is answered with {"event": "pong"} so
mobile clients can keep the connection warm; anything else is ignored.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from core.broadcast import BroadcastChannel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["live"])


@router.websocket("/ws/results")
async def live_results(websocket: WebSocket):
    channel: BroadcastChannel = websocket.app.state.broadcaster
    await channel.connect(websocket)
    try:
        while True:
            message = await websocket.receive_text()
            if message == "ping":
                await websocket.send_json({"event": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        channel.disconnect(websocket)
