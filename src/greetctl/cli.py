"""Root CLI group for greetctl with global flags and command registration."""

from __future__ import annotations

import click

from greetctl import __version__
from greetctl.commands import register_commands
from greetctl.commands._context import AppContext
from greetctl.config.settings import GreetSettings


@click.group("greetctl", invoke_without_command=True)
@click.version_option(version=__version__, prog_name="greetctl")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging, including published events.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    no_color: bool,
    config_path: str | None,
) -> None:
    """greetctl — say hello, with a command runner and an event bus behind it.

    Without a subcommand, runs the primary command.
    """
    # Unset flags are passed as None so they don't mask env/TOML values.
    settings = GreetSettings.from_cli(
        config_path=config_path,
        verbose=verbose or None,
        log_json=log_json or None,
        no_color=no_color or None,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        ctx.exit(ctx.obj.run())


register_commands(cli)


def main() -> None:
    """Console-script entry point."""
    cli()
