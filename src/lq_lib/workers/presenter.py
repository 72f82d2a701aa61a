# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from lq_lib.core.common import get_panel_width
from lq_lib.core.config import CFG
from lq_lib.emit.emitter import EmitResult
from lq_lib.properties.queue_definition import QueueDefinition
from lq_lib.properties.queue_plan import QueuePlan
from lq_lib.properties.session import Session


class PlanPresenter:
    """
    Presents the configured queues and the outcome of their configuration.
    """

    def __init__(
        self, plan: QueuePlan, session: Session, result: EmitResult | None = None
    ):
        """
        Args:
            plan (QueuePlan): The configured queues.
            session (Session): Settings of the run.
            result (EmitResult | None): Outcome of the configuration.
                None if nothing has been written yet.
        """
        self._plan = plan
        self._session = session
        self._result = result

    def createPlanPanel(self, console: Console | None = None) -> Group:
        """
        Create a Rich panel summarizing the queues.

        Returns:
            Group: Rich Group containing the queues panel.
        """
        console = console or Console()
        settings = CFG.plan_presenter

        content = Group(self._createQueuesTable(), Text(""), self._createNotes())
        panel = Panel(
            content,
            title=Text(
                f"QUEUES OF {self._session.project.upper()}",
                style=settings.title_style,
                justify="center",
            ),
            border_style=settings.border_style,
            padding=(1, 1),
            width=get_panel_width(console, 1, settings.min_width, settings.max_width),
            expand=False,
        )

        return Group(Text(""), panel, Text(""))

    def _createQueuesTable(self) -> Table:
        """
        Construct a table with one row per queue.
        """
        settings = CFG.plan_presenter
        table = Table(show_header=True, box=None, padding=(0, 1))

        table.add_column(justify="left")
        for header, justify in [
            ("Queue", "left"),
            ("Processes", "right"),
            ("Priority", "center"),
            ("Max Time", "right"),
            ("Log File", "left"),
        ]:
            table.add_column(
                header=Text(header, justify="center", style=settings.headers_style),
                justify=justify,
            )

        for queue in self._plan:
            self._addQueueRow(queue, table)

        return table

    def _addQueueRow(self, queue: QueueDefinition, table: Table) -> None:
        """
        Add a row describing a single queue to the table.
        """
        settings = CFG.plan_presenter
        table.add_row(
            Text(settings.mark, style=self._markStyle(queue.name)),
            Text(queue.name, style=settings.main_style),
            Text(str(queue.process_count), style=settings.main_style),
            Text(str(queue.priority), style=settings.main_style),
            Text(f"{queue.max_runtime_seconds}s", style=settings.main_style),
            Text(str(self._session.logFile(queue.name)), style=settings.notes_style),
        )

    def _markStyle(self, queue_name: str) -> str:
        """
        Return the style of the mark of a queue based on its outcome.
        """
        settings = CFG.plan_presenter
        if self._result is None or queue_name not in self._result.outcomes:
            return settings.pending_style

        if self._result.outcomes[queue_name].ok:
            return settings.ok_style

        return settings.failed_style

    def _createNotes(self) -> Text:
        """
        Create a list of commands useful for managing the workers.
        """
        programs = f"{self._session.project}_*"
        lines = [
            f"{len(self._plan)} queue(s), {self._plan.total_processes} worker process(es) in total.",
            "",
            "queue-monitor                          # check queue status",
            "sudo supervisorctl status              # all supervisor processes",
            f"sudo supervisorctl restart {programs}   # restart all queues",
            f"sudo supervisorctl stop {programs}      # stop all queues",
        ]
        return Text("\n".join(lines), style=CFG.plan_presenter.notes_style)
