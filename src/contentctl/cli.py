"""Root CLI group for contentctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from contentctl import __version__
from contentctl.commands import register_commands
from contentctl.commands._context import AppContext
from contentctl.config.settings import ContentSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="contentctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--root",
    "site_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Site directory (default: config file's directory or CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    site_root: Path | None,
) -> None:
    """contentctl: validate and query a site's Markdown content."""
    settings = ContentSettings.from_cli(
        config_path=config_path,
        site_root=site_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
