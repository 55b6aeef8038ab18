"""Subcommand modules for ariesbot.

Provides register_commands() which uses deferred imports to keep
``ariesbot --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every subcommand on the root CLI group."""
    from ariesbot.commands.init_cmd import init_cmd
    from ariesbot.commands.invoke import invoke
    from ariesbot.commands.manifest import manifest
    from ariesbot.commands.say import say
    from ariesbot.commands.upgrade import upgrade
    from ariesbot.commands.users import users

    cli.add_command(init_cmd)
    cli.add_command(upgrade)
    cli.add_command(say)
    cli.add_command(invoke)
    cli.add_command(manifest)
    cli.add_command(users)
