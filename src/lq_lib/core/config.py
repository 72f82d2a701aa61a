# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for lq.

This module defines dataclasses representing all configurable aspects of lq,
including filesystem locations, the service user, host profiling thresholds,
queue defaults, worker command parameters, presentation settings and exit codes.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class Paths:
    """Filesystem locations used by lq."""

    # Directory in which Laravel projects are deployed.
    web_root: str = "/var/www/html"
    # Drop-in directory for Supervisor program definitions.
    supervisor_conf_dir: str = "/etc/supervisor/conf.d"
    # Install location of the queue monitor script.
    monitor_script: str = "/usr/local/bin/queue-monitor"
    # Kernel memory statistics.
    meminfo: str = "/proc/meminfo"
    # Directory (relative to the project) holding the worker logs.
    logs_subdir: str = "storage/logs"


@dataclass
class ServiceUser:
    """Account running the web server and the queue workers."""

    user: str = "www-data"
    group: str = "www-data"

    @property
    def owner(self) -> str:
        """Owner specification understood by chown."""
        return f"{self.user}:{self.group}"


@dataclass
class EnvironmentVariables:
    """Environment variable names used by lq."""

    # Enables lq debug mode.
    debug_mode: str = "LQ_DEBUG"
    # Explicit path to the lq configuration file.
    config: str = "LQ_CONFIG"


@dataclass
class ProfilerSettings:
    """Thresholds used to classify the host."""

    # Minimal RAM (GB) of a high-performance host.
    high_ram_gb: int = 8
    # Minimal CPU cores of a high-performance host.
    high_cores: int = 4
    # Worker processes per core on a high-performance host.
    high_processes_per_core: int = 2
    # Minimal RAM (GB) of a medium-performance host.
    medium_ram_gb: int = 4
    # Minimal CPU cores of a medium-performance host.
    medium_cores: int = 2
    # Fixed number of worker processes recommended for a basic host.
    basic_processes: int = 2


@dataclass
class QueueDefaults:
    """Defaults offered when collecting queue definitions."""

    # Name of the first queue.
    first_name: str = "default"
    # Pattern used for naming the other queues.
    name_pattern: str = "queue%d"
    # Number of processes offered for queues other than the first one.
    other_processes: int = 2
    # Default queue priority (1 = highest, 5 = lowest).
    priority: int = 3
    # Highest allowed priority.
    min_priority: int = 1
    # Lowest allowed priority.
    max_priority: int = 5
    # Default maximal runtime of a worker in seconds.
    max_runtime: int = 3600
    # A process count above `recommended * overload_factor` requires confirmation.
    overload_factor: int = 2


@dataclass
class WorkerSettings:
    """Parameters of the queue worker command and its Supervisor program."""

    # PHP binary used to run artisan.
    php_binary: str = "php"
    # Seconds a worker sleeps when the queue is empty.
    sleep: int = 3
    # Number of attempts of a job before it is marked as failed.
    tries: int = 3
    # Added to the max runtime to obtain the worker's --timeout.
    timeout_margin: int = 60
    # Added to the max runtime to obtain Supervisor's stopwaitsecs.
    stop_wait_margin: int = 120
    # Supervisor priority of a queue with priority 0.
    priority_base: int = 990
    # Supervisor priority increment per queue priority level.
    priority_step: int = 10


@dataclass
class CommandSettings:
    """Settings for running external commands."""

    # Prefix privileged commands and file writes with sudo.
    use_sudo: bool = True
    # Binary used to control Supervisor.
    supervisorctl: str = "supervisorctl"


@dataclass
class ProfilePresenterSettings:
    """Settings for ProfilePresenter."""

    # Maximal width of the profile panel.
    max_width: int | None = None
    # Minimal width of the profile panel.
    min_width: int | None = 50
    # Style of the border lines.
    border_style: str = "white"
    # Style of the title.
    title_style: str = "white bold"
    # Style used for the keys.
    key_style: str = "default bold"
    # Style used for the values.
    value_style: str = "white"


@dataclass
class PlanPresenterSettings:
    """Settings for PlanPresenter."""

    # Maximal width of the plan panel.
    max_width: int | None = None
    # Minimal width of the plan panel.
    min_width: int | None = 70
    # Style used for border lines.
    border_style: str = "white"
    # Style used for the title.
    title_style: str = "white bold"
    # Style used for table headers.
    headers_style: str = "default"
    # Style used for table values.
    main_style: str = "white"
    # Style used for extra notes.
    notes_style: str = "grey50"
    # Mark used for each queue.
    mark: str = "●"
    # Style used for the mark of a successfully emitted queue.
    ok_style: str = "bright_green"
    # Style used for the mark of a queue that failed to emit.
    failed_style: str = "bright_red"
    # Style used for the mark of a queue that has not been emitted yet.
    pending_style: str = "bright_yellow"


@dataclass
class TierColors:
    """Color scheme for Tier display."""

    basic: str = "bright_yellow"
    medium: str = "bright_blue"
    high: str = "bright_green"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for any validation failure or failing command.
    default: int = 1
    # Returned on an unexpected or unhandled error.
    unexpected_error: int = 99


@dataclass
class Config:
    """Main configuration for lq."""

    paths: Paths = field(default_factory=Paths)
    service: ServiceUser = field(default_factory=ServiceUser)
    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    profiler: ProfilerSettings = field(default_factory=ProfilerSettings)
    queue_defaults: QueueDefaults = field(default_factory=QueueDefaults)
    worker: WorkerSettings = field(default_factory=WorkerSettings)
    commands: CommandSettings = field(default_factory=CommandSettings)
    profile_presenter: ProfilePresenterSettings = field(
        default_factory=ProfilePresenterSettings
    )
    plan_presenter: PlanPresenterSettings = field(
        default_factory=PlanPresenterSettings
    )
    tier_colors: TierColors = field(default_factory=TierColors)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)

    # Name of the lq binary.
    binary_name: str = "lq"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read lq config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            Path(env_path) if (env_path := os.getenv("LQ_CONFIG")) else None,
            Path.cwd() / "lq_config.toml",
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "lq"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Nested dataclass sections are converted as well; unknown keys are ignored.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        name = field_info.name
        if name not in data:
            continue

        value = data[name]
        if is_dataclass(field_info.type) and isinstance(value, dict):
            field_values[name] = _dict_to_dataclass(field_info.type, value)
        else:
            field_values[name] = value

    return cls(**field_values)


# Global configuration for lq.
CFG = Config.load()
