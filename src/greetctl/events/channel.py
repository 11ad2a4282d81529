"""Unbounded in-process event channel on an anyio memory object stream.

Publishing never waits for capacity. Each ``subscribe_all()`` call opens
its own receiver clone, so iteration can be restarted; concurrent
subscribers split the stream between them (work-queue semantics).
"""

from __future__ import annotations

import logging
import math
from collections.abc import AsyncIterator
from typing import Any

import anyio

from greetctl.concurrency import CancelToken, guarded
from greetctl.errors import ChannelClosed, OperationCancelled

logger = logging.getLogger(__name__)


class EventChannel:
    """FIFO channel carrying arbitrary event objects.

    Items published before anyone subscribes stay buffered until read.
    ``close()`` ends every subscription once the buffer is drained.
    """

    def __init__(self) -> None:
        self._send, self._receive = anyio.create_memory_object_stream[Any](
            max_buffer_size=math.inf
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        """Number of published items not yet delivered."""
        return self._send.statistics().current_buffer_used

    async def publish(self, event: Any, cancel: CancelToken | None = None) -> None:
        """Enqueue *event*.

        Raises:
            ChannelClosed: The channel was closed.
            OperationCancelled: *cancel* fired before the event was queued.
        """
        if self._closed:
            raise ChannelClosed(f"cannot publish {type(event).__name__}: channel closed")
        await guarded(cancel, self._send.send, event)
        logger.debug("Published %s (%d pending)", type(event).__name__, self.pending)

    async def subscribe_all(self, cancel: CancelToken | None = None) -> AsyncIterator[Any]:
        """Yield received events until the channel closes or *cancel* fires."""
        receiver = self._receive.clone()
        try:
            while True:
                try:
                    event = await guarded(cancel, receiver.receive)
                except (anyio.EndOfStream, OperationCancelled):
                    return
                yield event
        finally:
            receiver.close()

    def close(self) -> None:
        """Stop accepting events. Buffered events are still delivered."""
        if self._closed:
            return
        self._closed = True
        self._send.close()

    def dispose(self) -> None:
        """Close the channel and release the receiving side."""
        self.close()
        self._receive.close()

    def __enter__(self) -> EventChannel:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()
