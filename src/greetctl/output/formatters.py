"""Text formatting for runner diagnostics and the command listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rich.table import Table

    from greetctl.services.registry import CommandEntry
    from greetctl.services.result import Failure


def format_failure(result: Failure) -> str:
    """One-line diagnostic for a failed command."""
    return f"Unhandled error: {result.error.code}: {result.error.message}"


def command_table(entries: list[CommandEntry]) -> Table:
    """Rich table of registered commands, primary first marked with ``*``."""
    from rich.table import Table

    table = Table(show_header=True, header_style="greet.key", box=None)
    table.add_column("", width=1)
    table.add_column("Command", style="greet.name")
    table.add_column("Summary")
    for entry in entries:
        marker = "[greet.primary]*[/greet.primary]" if entry.primary else ""
        table.add_row(marker, entry.name, entry.summary)
    return table
