# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from lq_lib.core.common import validate_name
from lq_lib.core.config import CFG, ServiceUser


@dataclass(frozen=True)
class Session:
    """
    Settings of a single provisioning run, passed to every component that needs them.

    Attributes:
        project (str): Name of the Laravel project, used to name Supervisor programs.
        project_path (Path): Directory containing the Laravel project.
        service (ServiceUser): Account running the web server and the workers.
        supervisor_conf_dir (Path): Drop-in directory for Supervisor program files.
    """

    project: str
    project_path: Path
    service: ServiceUser = field(default_factory=lambda: CFG.service)
    supervisor_conf_dir: Path = field(
        default_factory=lambda: Path(CFG.paths.supervisor_conf_dir)
    )

    @classmethod
    def forProject(cls, project: str, project_path: Path | None = None) -> Self:
        """
        Create a session for a project deployed in the web root.

        Args:
            project (str): Name of the project.
            project_path (Path | None): Location of the project. Defaults to
                the project's directory inside the configured web root.
        """
        project = validate_name(project, "project")
        if project_path is None:
            project_path = Path(CFG.paths.web_root) / project

        return cls(project=project, project_path=project_path.resolve())

    @property
    def logs_dir(self) -> Path:
        """Directory holding the worker logs."""
        return self.project_path / CFG.paths.logs_subdir

    def programName(self, queue_name: str) -> str:
        """Name of the Supervisor program serving the given queue."""
        return f"{self.project}_{queue_name}"

    def configFile(self, queue_name: str) -> Path:
        """Path to the Supervisor program file of the given queue."""
        return self.supervisor_conf_dir / f"{self.programName(queue_name)}.conf"

    def logFile(self, queue_name: str) -> Path:
        """Path to the log file of the given queue."""
        return self.logs_dir / f"queue_{queue_name}.log"
