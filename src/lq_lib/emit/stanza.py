# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Supervisor program definitions for queue workers.
"""

import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Self

from lq_lib.core.config import CFG
from lq_lib.properties.drivers import DriverSelection
from lq_lib.properties.queue_definition import QueueDefinition
from lq_lib.properties.session import Session


@dataclass(frozen=True)
class SupervisorStanza:
    """
    A Supervisor `[program:...]` section running the workers of one queue.

    Attributes:
        program (str): Name of the Supervisor program (`{project}_{queue}`).
        command (str): Command line of a single worker process.
        numprocs (int): Number of worker processes.
        stdout_logfile (Path): File collecting the output of the workers.
        stopwaitsecs (int): Seconds to wait for a graceful stop.
        user (str): Account running the workers.
        priority (int): Supervisor priority of the program.
    """

    program: str
    command: str
    numprocs: int
    stdout_logfile: Path
    stopwaitsecs: int
    user: str
    priority: int

    @classmethod
    def fromQueue(
        cls, queue: QueueDefinition, session: Session, drivers: DriverSelection
    ) -> Self:
        """
        Derive the program definition of a queue.

        Args:
            queue (QueueDefinition): The queue served by the program.
            session (Session): Settings of the current run.
            drivers (DriverSelection): Selected drivers; the queue driver is the
                connection the workers listen on.
        """
        worker = CFG.worker
        command = [
            worker.php_binary,
            str(session.project_path / "artisan"),
            "queue:work",
            str(drivers.queue_driver),
            f"--queue={queue.name}",
            f"--sleep={worker.sleep}",
            f"--tries={worker.tries}",
            f"--max-time={queue.max_runtime_seconds}",
            f"--timeout={queue.command_timeout}",
        ]

        return cls(
            program=session.programName(queue.name),
            command=shlex.join(command),
            numprocs=queue.process_count,
            stdout_logfile=session.logFile(queue.name),
            stopwaitsecs=queue.stop_wait_seconds,
            user=session.service.user,
            priority=queue.supervisor_priority,
        )

    def render(self) -> str:
        """
        Render the program section. Equal stanzas render to identical text.
        """
        lines = [
            f"[program:{self.program}]",
            "process_name=%(program_name)s_%(process_num)02d",
            f"command={self.command}",
            "autostart=true",
            "autorestart=true",
            "stopasgroup=true",
            "killasgroup=true",
            f"numprocs={self.numprocs}",
            "redirect_stderr=true",
            f"stdout_logfile={self.stdout_logfile}",
            f"stopwaitsecs={self.stopwaitsecs}",
            f"user={self.user}",
            f"priority={self.priority}",
        ]
        return "\n".join(lines) + "\n"
