"""Click subcommands for greetctl.

``register_commands()`` adds the subcommands to the root group and gives
every command listed in :data:`EXAMPLES`, root included, an eager
``--examples`` flag. Keeping examples out of docstrings keeps ``--help`` short.
"""

from __future__ import annotations

import click

EXAMPLES: dict[str, str] = {
    "greetctl": """\
  greetctl
  greetctl -v --log-json
  greetctl -c ./greetctl.toml run""",
    "run": """\
  greetctl run
  greetctl run greet
  echo Ada | greetctl -v run""",
    "list": """\
  greetctl list
  greetctl --no-color list""",
}


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    click.echo(f"Examples for '{ctx.command_path}':\n")
    click.echo(EXAMPLES[ctx.command.name or ""])
    ctx.exit(0)


def add_examples(command: click.Command) -> None:
    """Attach ``--examples`` to *command* when :data:`EXAMPLES` has an entry for it."""
    if command.name not in EXAMPLES:
        return
    command.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=_show_examples,
            help="Show usage examples.",
        )
    )


def register_commands(cli: click.Group) -> None:
    """Attach the subcommands, then ``--examples`` on every known command."""
    from greetctl.commands.list_cmd import list_cmd
    from greetctl.commands.run import run

    cli.add_command(run)
    cli.add_command(list_cmd)
    for command in (cli, *cli.commands.values()):
        add_examples(command)
