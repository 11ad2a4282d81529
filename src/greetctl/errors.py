"""Error taxonomy and process exit codes.

Configuration errors abort startup before any command runs and surface
through Click's error rendering. Operational errors are raised inside a
command and converted into a ``Failure`` result by the command itself.
"""

from __future__ import annotations

import click

EXIT_OK = 0
EXIT_FAILURE = 2
EXIT_CONFIG_ERROR = 3


class ConfigurationError(click.ClickException):
    """Fatal startup misconfiguration (registry, config file)."""

    exit_code = EXIT_CONFIG_ERROR


class GreetctlError(Exception):
    """Base class for operational errors."""


class OperationCancelled(GreetctlError):
    """The shared cancellation token fired while an operation was pending."""

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)


class ChannelClosed(GreetctlError):
    """An event was published after the channel was closed."""
