# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

import sys

import click
from click_help_colors import HelpColorsGroup

from mjsync_lib.login.cli import login
from mjsync_lib.status.cli import status
from mjsync_lib.sync.cli import sync
from mjsync_lib.watch.cli import watch

__version__ = "1.4.0"

# support both --help and -h
_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    cls=HelpColorsGroup,
    help_options_color="bright_blue",
    invoke_without_command=True,
    context_settings=_CONTEXT_SETTINGS,
)
@click.option(
    "--version",
    is_flag=True,
    help="Print the current version of mjsync and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Run any mjsync command.

    mjsync mirrors your completed generation jobs, their metadata and images, into a local directory.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(login)
cli.add_command(sync)
cli.add_command(watch)
cli.add_command(status)
