"""Command: run the primary command, or a named one."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from greetctl.commands._context import AppContext


@click.command("run")
@click.argument("name", required=False)
@click.pass_context
def run(ctx: click.Context, name: str | None) -> None:
    """Run the primary command (or NAME) and exit with its status."""
    app: AppContext = ctx.obj
    ctx.exit(app.run(name))
