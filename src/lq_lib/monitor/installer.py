# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path

from lq_lib.core.commander import Commander
from lq_lib.core.config import CFG
from lq_lib.core.logger import get_logger

logger = get_logger(__name__)

# Status report of the queue workers of all projects on this host.
MONITOR_SCRIPT = """\
#!/bin/bash
echo "=== Laravel Queue Status ==="
echo "Date: $(date)"
echo ""

echo "Supervisor Status:"
sudo supervisorctl status | grep queue

echo ""
echo "Queue Statistics:"
if command -v redis-cli &> /dev/null; then
    echo "Redis Queue Length: $(redis-cli llen queues:default)"
fi

echo ""
echo "Recent Queue Logs:"
find {web_root}/*/storage/logs -name "queue_*.log" -exec tail -5 {{}} \\; 2>/dev/null
"""


class QueueMonitorInstaller:
    """
    Installs the `queue-monitor` status script.
    """

    def __init__(self, commander: Commander | None = None, path: Path | None = None):
        self._commander = commander or Commander()
        self._path = path or Path(CFG.paths.monitor_script)

    @staticmethod
    def script() -> str:
        """Return the content of the monitor script."""
        return MONITOR_SCRIPT.format(web_root=CFG.paths.web_root)

    def install(self) -> Path:
        """
        Write the monitor script and make it executable. An existing script is overwritten.

        Returns:
            Path: Location of the installed script.

        Raises:
            LQError: If the script could not be written.
        """
        self._commander.writeFile(self._path, QueueMonitorInstaller.script())
        self._commander.chmod(self._path, 0o755)

        logger.info(f"Installed queue monitor '{self._path}'.")
        return self._path
