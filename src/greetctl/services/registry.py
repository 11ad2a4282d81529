"""Command registry — explicit, write-once registration of runnable commands.

Commands are listed in :func:`default_registry` rather than discovered by
scanning modules. Exactly one entry must carry the ``primary`` flag; the
cardinality check runs before any command is instantiated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from greetctl.errors import ConfigurationError

if TYPE_CHECKING:
    from greetctl.services.base import CommandFactory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandEntry:
    """A registered command."""

    name: str
    factory: CommandFactory
    primary: bool = False
    summary: str = ""


class CommandRegistry:
    """Name -> :class:`CommandEntry` mapping, sealed after startup."""

    def __init__(self) -> None:
        self._entries: dict[str, CommandEntry] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def register(
        self,
        name: str,
        factory: CommandFactory,
        *,
        primary: bool = False,
        summary: str = "",
    ) -> None:
        """Add a command.

        Raises:
            ConfigurationError: The registry is sealed, or *name* is taken.
        """
        if self._sealed:
            msg = f"Cannot register command '{name}': registry is sealed"
            raise ConfigurationError(msg)
        if name in self._entries:
            msg = f"Command '{name}' is already registered"
            raise ConfigurationError(msg)
        self._entries[name] = CommandEntry(
            name=name, factory=factory, primary=primary, summary=summary
        )
        logger.debug("Registered command: %s%s", name, " (primary)" if primary else "")

    def seal(self) -> CommandRegistry:
        """Freeze the registry; later registrations are configuration errors."""
        self._sealed = True
        return self

    def entries(self) -> list[CommandEntry]:
        """All entries in registration order."""
        return list(self._entries.values())

    def get(self, name: str) -> CommandEntry:
        try:
            return self._entries[name]
        except KeyError:
            known = ", ".join(self._entries) or "none"
            msg = f"Unknown command '{name}' (registered: {known})"
            raise ConfigurationError(msg) from None

    def primary(self) -> CommandEntry:
        """Return the single primary entry.

        Raises:
            ConfigurationError: Zero or more than one entry is primary.
        """
        primaries = [e for e in self._entries.values() if e.primary]
        if not primaries:
            raise ConfigurationError("No primary command registered")
        if len(primaries) > 1:
            names = ", ".join(e.name for e in primaries)
            msg = f"Multiple primary commands registered: {names}"
            raise ConfigurationError(msg)
        return primaries[0]

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def default_registry() -> CommandRegistry:
    """Build the sealed registry of built-in commands.

    Uses deferred imports so listing commands does not load their modules.
    """
    from greetctl.services.greet import GreetCommand

    registry = CommandRegistry()
    registry.register(
        "greet",
        GreetCommand,
        primary=True,
        summary="Ask for a name and print a greeting.",
    )
    return registry.seal()
