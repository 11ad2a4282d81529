"""AppContext — shared Click context for all subcommands.

Created once by the root CLI group and passed down via ``@click.pass_obj``.
Configures logging up front; the command registry and the application
are built lazily so ``--help`` and ``--version`` stay cheap.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from greetctl.config.logging import configure_logging

if TYPE_CHECKING:
    from greetctl.app import Application
    from greetctl.config.settings import GreetSettings
    from greetctl.services.registry import CommandRegistry

logger = logging.getLogger(__name__)


class AppContext:
    """Settings plus lazily created registry and application."""

    def __init__(self, settings: GreetSettings) -> None:
        self.settings = settings
        self._registry: CommandRegistry | None = None
        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            no_color=settings.no_color,
        )
        logger.debug("Settings loaded from %s", settings.location.describe())

    @property
    def registry(self) -> CommandRegistry:
        """The sealed built-in command registry (created on first access)."""
        if self._registry is None:
            from greetctl.services.registry import default_registry

            self._registry = default_registry()
        return self._registry

    def application(self) -> Application:
        from greetctl.app import Application

        return Application(self.settings, registry=self.registry)

    def run(self, command: str | None = None) -> int:
        """Run *command* (default: primary) to completion; return the exit code."""
        return self.application().run_sync(command)
