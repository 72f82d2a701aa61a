# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand

from lq_lib.core.config import CFG
from lq_lib.core.error import LQError
from lq_lib.core.logger import get_logger

from .installer import QueueMonitorInstaller

logger = get_logger(__name__)


@click.command(
    short_help="Install the queue-monitor script.",
    help=f"""Install the `queue-monitor` script to '{CFG.paths.monitor_script}'.

Running `queue-monitor` prints the status of all Supervisor programs serving queues,
the length of the default Redis queue (if Redis is installed), and the most recent
lines of the queue logs. An existing script is overwritten.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
def monitor() -> NoReturn:
    try:
        QueueMonitorInstaller().install()
        sys.exit(0)
    except LQError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
