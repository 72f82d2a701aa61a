# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import sys
from pathlib import Path
from typing import NoReturn

import click
from click_help_colors import HelpColorsCommand
from rich.console import Console

from lq_lib.core.answers import AnswerSource, FileAnswers, InteractiveAnswers
from lq_lib.core.config import CFG
from lq_lib.core.error import LQError
from lq_lib.core.logger import get_logger
from lq_lib.properties.session import Session

from .configurator import WorkerConfigurator, WorkersReport
from .presenter import PlanPresenter

logger = get_logger(__name__)


def get_answer_source(answers: str | None) -> AnswerSource:
    """
    Return the answer file source if a file was given, otherwise ask on the terminal.
    """
    if answers:
        return FileAnswers.fromFile(Path(answers))
    return InteractiveAnswers()


def print_report(report: WorkersReport, session: Session, console: Console) -> None:
    """
    Print the summary of configured queues, or the program files of a dry run.
    """
    if report.rendered is not None:
        for path, content in report.rendered.items():
            console.print(f"[bold]# {path}[/bold]")
            console.print(content, markup=False, highlight=False, soft_wrap=True)

    presenter = PlanPresenter(report.plan, session, report.result)
    console.print(presenter.createPlanPanel(console))


@click.command(
    short_help="Configure Supervisor-managed queue workers.",
    help=f"""Configure the Laravel queue workers of a project.

{click.style("PROJECT", fg="green")}   Name of the project. Used to name the Supervisor programs.

`{CFG.binary_name} workers` profiles this server, asks for the queue, cache and session drivers
and for the queues to run, writes one Supervisor program and one log file per queue,
reloads Supervisor, starts the workers, and installs the `queue-monitor` script.

Use `--answers` to read the answers from a YAML file instead of asking.""",
    cls=HelpColorsCommand,
    help_options_color="bright_blue",
)
@click.argument(
    "project",
    type=str,
    metavar=click.style("PROJECT", fg="green"),
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
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print the Supervisor programs without changing anything.",
)
def workers(
    project: str,
    path: str | None,
    answers: str | None,
    prune: bool = False,
    dry_run: bool = False,
) -> NoReturn:
    try:
        session = Session.forProject(project, Path(path) if path else None)
        configurator = WorkerConfigurator(session, get_answer_source(answers))
        report = configurator.run(prune=prune, dry_run=dry_run)

        print_report(report, session, Console())

        if not report.ok:
            raise LQError(
                f"Could not configure queue(s): {', '.join(report.result.failed)}."
            )
        sys.exit(0)
    except LQError as e:
        logger.error(e)
        sys.exit(CFG.exit_codes.default)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        sys.exit(CFG.exit_codes.unexpected_error)
