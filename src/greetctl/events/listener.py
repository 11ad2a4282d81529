"""Background event logger — the channel's sole consumer.

Runs as a supervised task inside the application's task group. Each
received event becomes one DEBUG log line; nothing else reacts to it.

INVARIANT: Logger failures are warnings, never errors. They never reach
the main flow or change the exit code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import anyio

from greetctl.events.models import Event

if TYPE_CHECKING:
    from anyio.abc import TaskGroup, TaskStatus

    from greetctl.concurrency import CancelToken
    from greetctl.events.channel import EventChannel

logger = logging.getLogger(__name__)


class EventLogger:
    """Drain an :class:`EventChannel` into the log.

    Parameters:
        channel: Channel to consume.

    Usage::

        async with anyio.create_task_group() as tg:
            await listener.start(tg, cancel)
            ...
            channel.close()
            await listener.stop(grace=1.0)
    """

    def __init__(self, channel: EventChannel) -> None:
        self._channel = channel
        self._scope: anyio.CancelScope | None = None
        self._finished: anyio.Event | None = None
        self.events_logged = 0

    @property
    def running(self) -> bool:
        return self._finished is not None and not self._finished.is_set()

    async def start(self, task_group: TaskGroup, cancel: CancelToken) -> None:
        """Spawn the consuming loop in *task_group*; returns once it is running."""
        await task_group.start(self._run, cancel)

    async def stop(self, grace: float = 1.0) -> None:
        """Wait up to *grace* seconds for the loop to drain, then cancel it."""
        if self._finished is None or self._scope is None:
            return
        with anyio.move_on_after(grace):
            await self._finished.wait()
        if not self._finished.is_set():
            logger.debug("Event logger still busy after %.2fs; cancelling", grace)
            self._scope.cancel()
            await self._finished.wait()

    async def _run(
        self,
        cancel: CancelToken,
        *,
        task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED,
    ) -> None:
        self._finished = anyio.Event()
        try:
            with anyio.CancelScope() as scope:
                self._scope = scope
                task_status.started()
                try:
                    async for event in self._channel.subscribe_all(cancel):
                        self._log(event)
                except Exception:
                    logger.warning("Event logger stopped on error", exc_info=True)
        finally:
            self._finished.set()
        logger.debug("Event logger finished after %d events", self.events_logged)

    def _log(self, event: Any) -> None:
        if isinstance(event, Event):
            logger.debug("[EVENT] %s %s", event.kind, event.payload())
        else:
            logger.debug("[EVENT] %r", event)
        self.events_logged += 1
