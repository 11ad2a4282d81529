"""Application — composition root and process lifetime.

Wires the console port, event channel and command registry together,
then runs one command inside an anyio task group alongside two
supervised helpers:

* the interrupt watcher, which turns SIGINT/SIGTERM into a fired
  :class:`~greetctl.concurrency.CancelToken`;
* the :class:`~greetctl.events.listener.EventLogger`, the channel's sole
  consumer.

Both helpers are stopped and joined before :meth:`Application.run`
returns, so nothing is left running at process exit.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import TYPE_CHECKING

import anyio

from greetctl.concurrency import CancelToken
from greetctl.errors import EXIT_FAILURE, ConfigurationError
from greetctl.events.channel import EventChannel
from greetctl.events.listener import EventLogger
from greetctl.output.console import StandardConsole, create_console
from greetctl.services.base import CommandDeps
from greetctl.services.registry import default_registry
from greetctl.services.runner import CommandRunner

if TYPE_CHECKING:
    from anyio.abc import TaskStatus

    from greetctl.config.settings import GreetSettings
    from greetctl.output.console import ConsolePort
    from greetctl.services.registry import CommandRegistry

logger = logging.getLogger(__name__)

INTERRUPT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class Application:
    """One greetctl run.

    Parameters:
        settings: Resolved settings.
        console: Console port; defaults to a :class:`StandardConsole` on
            the process's stdin/stdout.
        registry: Sealed command registry; defaults to the built-ins.
        handle_signals: Install the interrupt watcher (needs the main thread).
    """

    def __init__(
        self,
        settings: GreetSettings,
        *,
        console: ConsolePort | None = None,
        registry: CommandRegistry | None = None,
        handle_signals: bool = True,
    ) -> None:
        self.settings = settings
        if console is None:
            console = StandardConsole(create_console(sys.stdout, no_color=settings.no_color))
        self.console = console
        self.registry = registry or default_registry()
        self.cancel = CancelToken()
        self.events_logged = 0
        self._handle_signals = handle_signals

    def run_sync(self, command: str | None = None) -> int:
        """Blocking entry point used by the CLI."""
        return anyio.run(self.run, command)

    async def run(self, command: str | None = None) -> int:
        """Run *command* (default: the primary one) and return its exit code."""
        # Fail fast on registry misconfiguration before any task or I/O starts.
        if command is None:
            self.registry.primary()
        else:
            self.registry.get(command)

        code = EXIT_FAILURE
        error: ConfigurationError | None = None
        with EventChannel() as channel:
            deps = CommandDeps(console=self.console, events=channel, settings=self.settings)
            runner = CommandRunner(self.registry, deps)
            listener = EventLogger(channel)

            async with anyio.create_task_group() as tg:
                if self._handle_signals:
                    await tg.start(self._watch_interrupts)
                if self.settings.events.log_events:
                    await listener.start(tg, self.cancel)

                try:
                    if command is None:
                        code = await runner.run_primary(self.cancel)
                    else:
                        code = await runner.run(command, self.cancel)
                except ConfigurationError as exc:
                    # Re-raised outside the task group to avoid ExceptionGroup wrapping.
                    error = exc
                finally:
                    channel.close()
                    await listener.stop(grace=self.settings.events.drain_timeout)
                    tg.cancel_scope.cancel()

            self.events_logged = listener.events_logged

        if error is not None:
            raise error
        logger.debug("Exiting with code %d", code)
        return code

    async def _watch_interrupts(
        self,
        *,
        task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED,
    ) -> None:
        with anyio.open_signal_receiver(*INTERRUPT_SIGNALS) as signals:
            task_status.started()
            async for signum in signals:
                logger.info("Received %s; cancelling", signal.Signals(signum).name)
                self.cancel.cancel()
