# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys

import click
from click_help_colors import HelpColorsGroup

from lq_lib.monitor.cli import monitor
from lq_lib.profile.cli import profile
from lq_lib.provision.cli import provision
from lq_lib.workers.cli import workers

__version__ = "0.3.0"

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
    help="Print the current version of lq and exit.",
)
@click.pass_context
def cli(ctx: click.Context, version: bool):
    """
    Run any lq command.

    lq prepares Laravel applications on a server and configures their
    Supervisor-managed queue workers.
    """
    if version:
        print(__version__)
        sys.exit(0)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        sys.exit(0)


cli.add_command(profile)
cli.add_command(workers)
cli.add_command(monitor)
cli.add_command(provision)
