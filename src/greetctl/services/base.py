"""BaseCommand — abstract foundation for every runnable command.

Commands receive their collaborators explicitly through
:class:`CommandDeps` at construction time; nothing is looked up from
global state. A command's ``execute`` never raises: faults become a
:class:`~greetctl.services.result.Failure`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from greetctl.concurrency import CancelToken
    from greetctl.config.settings import GreetSettings
    from greetctl.events.channel import EventChannel
    from greetctl.output.console import ConsolePort
    from greetctl.services.result import Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandDeps:
    """Shared collaborators handed to every command factory."""

    console: ConsolePort
    events: EventChannel
    settings: GreetSettings


class BaseCommand(ABC):
    """Abstract base for command classes.

    Usage::

        class WaveCommand(BaseCommand):
            op = "wave"

            async def execute(self, cancel: CancelToken) -> Result[None]:
                try:
                    await self._console.write_line("o/", cancel)
                except Exception as exc:
                    return Failure.from_exception(self.op, exc)
                return Success(op=self.op, value=None)
    """

    op: str = "command"

    def __init__(self, deps: CommandDeps) -> None:
        self._console = deps.console
        self._events = deps.events
        self._settings = deps.settings

    @abstractmethod
    async def execute(self, cancel: CancelToken) -> Result[None]:
        """Run the command to completion, reporting faults as ``Failure``."""

    async def _publish(self, event: Any, cancel: CancelToken) -> None:
        """Publish a notification for the background logger."""
        await self._events.publish(event, cancel)
        logger.debug("%s published %s", self.op, type(event).__name__)


CommandFactory = Callable[[CommandDeps], BaseCommand]
