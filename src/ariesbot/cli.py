"""Root CLI group for ariesbot with global flags and command registration."""

from __future__ import annotations

import click

from ariesbot import __version__
from ariesbot.commands import register_commands
from ariesbot.commands._context import AppContext
from ariesbot.config.settings import AriesSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="ariesbot")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """ariesbot — chat command processor and user registry."""
    settings = AriesSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
