"""Command: list registered commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from greetctl.commands._context import AppContext


@click.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List registered commands; the primary one is marked with '*'."""
    from greetctl.output.console import create_console, get_output
    from greetctl.output.formatters import command_table

    console = create_console(no_color=app.settings.no_color)
    console.print(command_table(app.registry.entries()))
    click.echo(get_output(console), nl=False)
