# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration of Supervisor-managed queue workers.

The configuration is a one-way pipeline: the host is profiled, the drivers are
selected, the queues are planned, their Supervisor programs are written and
the queue monitor is installed.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from lq_lib.core.answers import AnswerSource
from lq_lib.core.commander import Commander
from lq_lib.core.logger import get_logger
from lq_lib.drivers.selector import DriverSelector
from lq_lib.emit.emitter import EmitResult, SupervisorConfigEmitter
from lq_lib.monitor.installer import QueueMonitorInstaller
from lq_lib.plan.builder import QueuePlanBuilder
from lq_lib.profile.profiler import HostProfiler
from lq_lib.properties.drivers import DriverSelection
from lq_lib.properties.host_profile import HostProfile
from lq_lib.properties.queue_plan import QueuePlan
from lq_lib.properties.session import Session

logger = get_logger(__name__)


@dataclass
class WorkersReport:
    """
    Everything decided and done while configuring the workers.

    Attributes:
        profile (HostProfile): Capacity of the host.
        drivers (DriverSelection): Selected drivers.
        plan (QueuePlan): Configured queues.
        result (EmitResult | None): Outcome of writing the programs. None for dry runs.
        rendered (dict[Path, str] | None): Program files that would be written. Only for dry runs.
        monitor (Path | None): Location of the installed monitor script.
    """

    profile: HostProfile
    drivers: DriverSelection
    plan: QueuePlan
    result: EmitResult | None = None
    rendered: dict[Path, str] | None = None
    monitor: Path | None = None

    @property
    def ok(self) -> bool:
        """True unless a queue could not be configured."""
        return self.result is None or self.result.ok


class WorkerConfigurator:
    """
    Runs the queue worker configuration pipeline for one project.
    """

    def __init__(
        self,
        session: Session,
        answers: AnswerSource,
        commander: Commander | None = None,
        profiler: HostProfiler | None = None,
    ):
        self._session = session
        self._answers = answers
        self._commander = commander or Commander()
        self._profiler = profiler or HostProfiler()

    def run(
        self,
        prune: bool = False,
        dry_run: bool = False,
        on_drivers: Callable[[DriverSelection], object] | None = None,
    ) -> WorkersReport:
        """
        Configure the queue workers.

        Args:
            prune (bool): Delete program files of queues that are no longer configured.
            dry_run (bool): Only render the program files, do not change the system.
            on_drivers (Callable | None): Called with the selected drivers before
                the queues are planned.

        Returns:
            WorkersReport: Summary of the configuration.

        Raises:
            LQError: If the host cannot be profiled, an answer is invalid,
                or Supervisor cannot be reloaded.
        """
        # the plan is validated against the profile, so profile first
        profile = self._profiler.profile()
        logger.info(
            f"Server type: {profile.tier.describe()}, "
            f"recommended queue processes: {profile.recommended_processes}."
        )

        drivers = DriverSelector.select(DriverSelector.collect(self._answers))
        if on_drivers:
            on_drivers(drivers)

        builder = QueuePlanBuilder(profile, self._answers)
        plan = builder.build(builder.askQueueCount())

        emitter = SupervisorConfigEmitter(self._session, self._commander)
        if dry_run:
            return WorkersReport(
                profile=profile,
                drivers=drivers,
                plan=plan,
                rendered=emitter.render(plan, drivers),
            )

        result = emitter.emit(plan, drivers, prune=prune)
        monitor = QueueMonitorInstaller(self._commander).install()

        return WorkersReport(
            profile=profile, drivers=drivers, plan=plan, result=result, monitor=monitor
        )
