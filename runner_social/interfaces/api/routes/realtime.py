"""Websocket endpoint streaming conversation and notification events."""

from __future__ import annotations

import logging

import anyio
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from runner_social.infrastructure.notifications import Subscriber, realtime_manager

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


async def _receive_frames(websocket: WebSocket, subscriber: Subscriber) -> None:
    while True:
        try:
            message = await websocket.receive_json()
        except WebSocketDisconnect:
            return
        except ValueError:
            logger.debug("Ignoring websocket frame that is not JSON")
            continue

        if isinstance(message, dict) and message.get("type") == "ping":
            try:
                await subscriber.send_stream.send({"type": "pong"})
            except (anyio.BrokenResourceError, anyio.ClosedResourceError):
                return


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Push every broadcast event to the client until it disconnects."""

    subscriber = await realtime_manager.connect(websocket)
    try:
        async with anyio.create_task_group() as task_group:
            task_group.start_soon(realtime_manager.pump, subscriber)
            await _receive_frames(websocket, subscriber)
            task_group.cancel_scope.cancel()
    finally:
        realtime_manager.disconnect(subscriber)
