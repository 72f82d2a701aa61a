# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from rich.console import Console

from lq_lib.core.common import project_name_from_repository
from lq_lib.core.config import CFG
from lq_lib.core.error import LQError
from lq_lib.core.logger import get_logger
from lq_lib.properties.session import Session
from lq_lib.workers.cli import get_answer_source, print_report

from .provisioner import Provisioner

logger = get_logger(__name__)


@click.command(
    short_help="Prepare a Laravel project and its queue workers.",
    help=f"""Prepare a Laravel project on this server and configure its queue workers.

{click.style("PROJECT", fg="green")}   Name of the project. Optional if `--repository` is given.

`{CFG.binary_name} provision` installs Supervisor, clones the project (if `--repository` is given
and the project does not exist yet), fixes its permissions, installs its Composer dependencies
and links its storage. If you choose to configure queues, it then profiles the server, asks for
the queue, cache and session drivers, writes them to `.env` and configures the queue workers.
Finally it installs Redis if any driver needs it.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "project",
    type=str,
    metavar=click.style("PROJECT", fg="green"),
    required=False,
    default=None,
)
@click.option(
    "--repository",
    type=str,
    default=None,
    help="Git repository of the project. Cloned into the project directory if it does not exist.",
)
@click.option(
    "--path",
    type=click.Path(file_okay=False),
    default=None,
    help=f"Directory of the project. Defaults to '{CFG.paths.web_root}/PROJECT'.",
)
@click.option(
    "--answers",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML file with answers to all questions.",
)
@click.option(
    "--prune",
    is_flag=True,
    help="Remove Supervisor programs of this project's queues that are no longer configured.",
)
def provision(
    project: str | None,
    repository: str | None,
    path: str | None,
    answers: str | None,
    prune: bool = False,
) -> NoReturn:
    try:
        if not project:
            if not repository:
                raise LQError("Specify the project name or its repository.")
            project = project_name_from_repository(repository)

        session = Session.forProject(project, Path(path) if path else None)
        provisioner = Provisioner(session, get_answer_source(answers))
        report = provisioner.provision(repository=repository, prune=prune)

        if report:
            print_report(report, session, Console())
            if not report.ok:
                raise LQError(
                    f"Could not configure queue(s): {', '.join(report.result.failed)}."
                )

        logger.info(f"Project '{project}' provisioned in '{session.project_path}'.")
        sys.exit(0)
    except LQError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
