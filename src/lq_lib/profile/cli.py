# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from rich.console import Console

from lq_lib.core.config import CFG
from lq_lib.core.error import LQError
from lq_lib.core.logger import get_logger

from .presenter import ProfilePresenter
from .profiler import HostProfiler

logger = get_logger(__name__)


@click.command(
    short_help="Display the capacity of this server.",
    help="""Display the CPU cores and memory of this server, its performance tier,
and the number of queue worker processes it can handle efficiently.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.option("--yaml", is_flag=True, help="Output the profile in YAML format.")
def profile(yaml: bool) -> NoReturn:
    try:
        host_profile = HostProfiler().profile()
        presenter = ProfilePresenter(host_profile)
        if yaml:
            presenter.dumpYaml()
        else:
            console = Console()
            console.print(presenter.createProfilePanel(console))
        sys.exit(0)
    except LQError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
