# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Writing of Supervisor programs for the queues of a plan.

Each queue is configured independently: a queue that cannot be configured is
reported in the result but does not prevent the remaining queues from being
configured and started.
"""

from dataclasses import dataclass, field
from pathlib import Path

from lq_lib.core.commander import Commander
from lq_lib.core.config import CFG
from lq_lib.core.error import LQEmitError, LQError
from lq_lib.core.error_handlers import handle_emit_error
from lq_lib.core.logger import get_logger
from lq_lib.core.repeater import Repeater
from lq_lib.properties.drivers import DriverSelection
from lq_lib.properties.queue_definition import QueueDefinition
from lq_lib.properties.queue_plan import QueuePlan
from lq_lib.properties.session import Session

from .stanza import SupervisorStanza

logger = get_logger(__name__)


@dataclass
class QueueOutcome:
    """
    Result of configuring a single queue.

    Attributes:
        config_file (Path): Supervisor program file of the queue.
        log_file (Path): Log file of the queue's workers.
        error (LQError | None): Reason the queue could not be configured or started.
    """

    config_file: Path
    log_file: Path
    error: LQError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class EmitResult:
    """
    Result of configuring all queues of a plan.

    Attributes:
        outcomes (dict[str, QueueOutcome]): Outcome per queue name, in plan order.
        orphans (list[Path]): Program files of this project not belonging to any planned queue.
        removed_orphans (list[Path]): Orphaned program files that were deleted.
    """

    outcomes: dict[str, QueueOutcome] = field(default_factory=dict)
    orphans: list[Path] = field(default_factory=list)
    removed_orphans: list[Path] = field(default_factory=list)

    @property
    def succeeded(self) -> list[str]:
        """Names of the queues that were configured and started."""
        return [name for name, outcome in self.outcomes.items() if outcome.ok]

    @property
    def failed(self) -> list[str]:
        """Names of the queues that could not be configured or started."""
        return [name for name, outcome in self.outcomes.items() if not outcome.ok]

    @property
    def ok(self) -> bool:
        """True if every queue was configured and started."""
        return not self.failed


class SupervisorConfigEmitter:
    """
    Writes the Supervisor programs and log files of the queues and starts their workers.
    """

    def __init__(self, session: Session, commander: Commander | None = None):
        self._session = session
        self._commander = commander or Commander()

    def render(self, plan: QueuePlan, drivers: DriverSelection) -> dict[Path, str]:
        """
        Render the program files of a plan without writing anything.

        Returns:
            dict[Path, str]: Content of each program file, keyed by its path.
        """
        return {
            self._session.configFile(queue.name): SupervisorStanza.fromQueue(
                queue, self._session, drivers
            ).render()
            for queue in plan
        }

    def emit(
        self, plan: QueuePlan, drivers: DriverSelection, prune: bool = False
    ) -> EmitResult:
        """
        Configure all queues of the plan and start their workers.

        The program file and the log file of every queue are written first.
        Supervisor then rereads its configuration and the programs of all
        successfully configured queues are started.

        Args:
            plan (QueuePlan): The queues to configure.
            drivers (DriverSelection): Selected drivers.
            prune (bool): Delete program files of this project that belong
                to queues no longer in the plan.

        Returns:
            EmitResult: Outcome per queue and the orphaned program files.

        Raises:
            LQError: If Supervisor cannot reload its configuration.
        """
        queues = plan.queues
        result = EmitResult(
            outcomes={
                q.name: QueueOutcome(
                    config_file=self._session.configFile(q.name),
                    log_file=self._session.logFile(q.name),
                )
                for q in queues
            }
        )

        repeater = Repeater(queues, self._emitQueue, drivers)
        repeater.onException(LQEmitError, handle_emit_error)
        repeater.run()

        for i, error in repeater.encountered_errors.items():
            result.outcomes[queues[i].name].error = error  # ty: ignore[invalid-assignment]

        result.orphans = self.findOrphans(plan)
        for orphan in result.orphans:
            if prune:
                self._commander.removeFile(orphan)
                result.removed_orphans.append(orphan)
                logger.info(f"Removed stale program file '{orphan}'.")
            else:
                logger.warning(
                    f"Program file '{orphan}' does not belong to any configured queue. "
                    "Remove it or rerun with --prune."
                )

        if not result.succeeded and not result.removed_orphans:
            return result

        self._reloadSupervisor()
        for name in result.succeeded:
            self._startProgram(name, result.outcomes[name])

        return result

    def findOrphans(self, plan: QueuePlan) -> list[Path]:
        """
        Find program files of this project that belong to no queue of the plan.

        A file is considered to belong to this project if it is named
        `{project}_*.conf` and its workers log into this project's log directory.

        Returns:
            list[Path]: Sorted paths of the orphaned program files.
        """
        conf_dir = self._session.supervisor_conf_dir
        if not conf_dir.is_dir():
            return []

        planned = {self._session.configFile(name) for name in plan.names}
        marker = f"stdout_logfile={self._session.logs_dir}/queue_"

        orphans = []
        for path in sorted(conf_dir.glob(f"{self._session.project}_*.conf")):
            if path in planned:
                continue
            try:
                content = path.read_text()
            except OSError as e:
                logger.warning(f"Could not read program file '{path}': {e}.")
                continue
            if marker in content:
                orphans.append(path)

        return orphans

    def _emitQueue(self, queue: QueueDefinition, drivers: DriverSelection) -> None:
        """
        Prepare the log file of a queue and write its program file.

        The program file is written only once the log file exists and belongs
        to the service user, so Supervisor never picks up a program without its log.

        Raises:
            LQEmitError: If any of the files could not be written.
        """
        stanza = SupervisorStanza.fromQueue(queue, self._session, drivers)
        config_file = self._session.configFile(queue.name)
        log_file = self._session.logFile(queue.name)
        service = self._session.service

        try:
            self._commander.makeDirs(log_file.parent)
            self._commander.touch(log_file)
            self._commander.chown(log_file, service.user, service.group)
            self._commander.writeFile(config_file, stanza.render())
        except LQError as e:
            raise LQEmitError(queue.name, str(e)) from e

        logger.info(f"Created config for '{queue.name}' queue.")

    def _reloadSupervisor(self) -> None:
        """
        Make Supervisor reread its configuration and apply the changes.

        Raises:
            LQError: If any of the supervisorctl commands fails.
        """
        supervisorctl = CFG.commands.supervisorctl
        self._commander.run([supervisorctl, "reread"])
        self._commander.run([supervisorctl, "update"])

    def _startProgram(self, queue_name: str, outcome: QueueOutcome) -> None:
        """
        Start all worker processes of a queue. A failure is recorded in the outcome.
        """
        program = self._session.programName(queue_name)
        try:
            self._commander.run([CFG.commands.supervisorctl, "start", f"{program}:*"])
        except LQError as e:
            outcome.error = LQEmitError(queue_name, str(e))
            logger.error(outcome.error)
