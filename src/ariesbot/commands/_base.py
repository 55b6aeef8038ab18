"""Custom Click command class with --examples support.

When ``--examples`` is passed, the command prints usage examples and
exits, keeping ``--help`` concise.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class AriesCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


def identity_options(func: Any) -> Any:
    """Options describing who runs a bot command from the terminal."""
    options = [
        click.option("--as", "caller_id", type=int, required=True, help="Caller's user id."),
        click.option("--name", "caller_name", default=None, help="Caller's display name."),
        click.option(
            "--guild",
            "guild_id",
            type=int,
            default=None,
            help="Guild id (defaults to [directory] guild_id).",
        ),
        click.option("--dm", is_flag=True, help="Run outside any guild."),
        click.option(
            "--role",
            "roles",
            multiple=True,
            help="Role the caller holds (repeatable).",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func
