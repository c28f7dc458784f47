"""Connection management helpers for the realtime websocket."""

from __future__ import annotations

import asyncio
import copy
import logging
import math
import threading
from dataclasses import dataclass, field
from typing import Any

import anyio
from anyio.streams.memory import MemoryObjectReceiveStream, MemoryObjectSendStream
from fastapi import WebSocket

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Subscriber:
    """One accepted websocket and its outgoing frame queue."""

    websocket: WebSocket
    loop: asyncio.AbstractEventLoop
    send_stream: MemoryObjectSendStream = field(repr=False)
    receive_stream: MemoryObjectReceiveStream = field(repr=False)


class RealtimeConnectionManager:
    """Broadcast frames to every connected websocket.

    ``broadcast`` may be called from any thread. Frames are handed to the
    event loop that owns each connection and queued there, so a connection
    receives frames in the order they were broadcast.
    """

    def __init__(self) -> None:
        self._subscribers: set[Subscriber] = set()
        self._lock = threading.Lock()

    async def connect(self, websocket: WebSocket) -> Subscriber:
        """Accept ``websocket`` and register it for broadcasts."""

        await websocket.accept()
        send_stream, receive_stream = anyio.create_memory_object_stream(math.inf)
        subscriber = Subscriber(
            websocket=websocket,
            loop=asyncio.get_running_loop(),
            send_stream=send_stream,
            receive_stream=receive_stream,
        )
        with self._lock:
            self._subscribers.add(subscriber)
        return subscriber

    def disconnect(self, subscriber: Subscriber) -> None:
        """Stop delivering frames to ``subscriber``."""

        with self._lock:
            self._subscribers.discard(subscriber)
        try:
            subscriber.loop.call_soon_threadsafe(subscriber.send_stream.close)
        except RuntimeError:
            # the owning loop is already closed
            pass

    @property
    def connection_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def broadcast(self, message: dict[str, Any]) -> None:
        """Queue ``message`` for every connected websocket."""

        with self._lock:
            subscribers = list(self._subscribers)
        for subscriber in subscribers:
            frame = copy.deepcopy(message)
            try:
                subscriber.loop.call_soon_threadsafe(self._enqueue, subscriber, frame)
            except RuntimeError:
                logger.info("Dropping websocket whose event loop has closed")
                with self._lock:
                    self._subscribers.discard(subscriber)

    async def pump(self, subscriber: Subscriber) -> None:
        """Send queued frames to the websocket until it is disconnected."""

        async with subscriber.receive_stream:
            async for frame in subscriber.receive_stream:
                try:
                    await subscriber.websocket.send_json(frame)
                except Exception as exc:
                    logger.info("Websocket send failed, disconnecting: %s", exc)
                    self.disconnect(subscriber)
                    return

    def _enqueue(self, subscriber: Subscriber, frame: dict[str, Any]) -> None:
        try:
            subscriber.send_stream.send_nowait(frame)
        except (anyio.ClosedResourceError, anyio.BrokenResourceError):
            logger.debug("Skipping frame for a closed websocket")


realtime_manager = RealtimeConnectionManager()


__all__ = ["RealtimeConnectionManager", "Subscriber", "realtime_manager"]
