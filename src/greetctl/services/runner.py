"""CommandRunner — locate a command, execute it, map its Result to an exit code.

Exit codes:
  * ``0`` — the command returned ``Success``
  * ``2`` — the command returned ``Failure`` (one diagnostic line is written)

Configuration errors (see :class:`~greetctl.errors.ConfigurationError`)
propagate before any command is instantiated or any I/O happens.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from greetctl.errors import EXIT_FAILURE, EXIT_OK, ConfigurationError
from greetctl.output.formatters import format_failure
from greetctl.services.result import Failure, Success

if TYPE_CHECKING:
    from greetctl.concurrency import CancelToken
    from greetctl.services.base import CommandDeps
    from greetctl.services.registry import CommandEntry, CommandRegistry
    from greetctl.services.result import Result

logger = logging.getLogger(__name__)


class CommandRunner:
    """Execute commands from a :class:`CommandRegistry` with shared deps."""

    def __init__(self, registry: CommandRegistry, deps: CommandDeps) -> None:
        self._registry = registry
        self._deps = deps

    async def run_primary(self, cancel: CancelToken) -> int:
        """Run the registry's primary command and return the exit code."""
        entry = self._registry.primary()
        return await self._execute(entry, cancel)

    async def run(self, name: str, cancel: CancelToken) -> int:
        """Run the command registered as *name* and return the exit code."""
        entry = self._registry.get(name)
        return await self._execute(entry, cancel)

    async def _execute(self, entry: CommandEntry, cancel: CancelToken) -> int:
        try:
            command = entry.factory(self._deps)
        except Exception as exc:
            msg = f"Cannot construct command '{entry.name}': {exc}"
            raise ConfigurationError(msg) from exc
        logger.debug("Running command: %s", entry.name)
        try:
            result: Result[None] = await command.execute(cancel)
        except Exception as exc:
            # The command broke its contract; report it like any other failure.
            logger.warning("Command %s raised instead of returning Failure", entry.name)
            result = Failure.from_exception(entry.name, exc)
        return await self._exit_code(result)

    async def _exit_code(self, result: Result[None]) -> int:
        if isinstance(result, Success):
            logger.debug("Command %s succeeded", result.op)
            return EXIT_OK
        if isinstance(result, Failure):
            error = result.error
            logger.debug("Command %s failed: %s %s", result.op, error.code, error.detail)
            # No cancel token: the diagnostic must survive an interrupt.
            try:
                await self._deps.console.write_line(format_failure(result))
            except Exception:
                logger.warning("Could not write diagnostic for %s", result.op, exc_info=True)
            return EXIT_FAILURE
        assert_never(result)
