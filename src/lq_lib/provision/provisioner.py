# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Provisioning steps surrounding the configuration of queue workers.

Every step delegates to external programs (apt, systemctl, git, composer,
artisan, chown/chmod/setfacl). Failing installations are fatal, composer
dependencies are installed through a chain of fallback strategies, and
cosmetic steps (ACLs, storage link) only produce warnings.
"""

from pathlib import Path

from lq_lib.core.answers import AnswerSource
from lq_lib.core.commander import Commander
from lq_lib.core.error import LQError
from lq_lib.core.error_handlers import handle_best_effort_error
from lq_lib.core.fallback import ChainResult, FallbackChain
from lq_lib.core.logger import get_logger
from lq_lib.core.repeater import Repeater
from lq_lib.properties.drivers import DriverSelection
from lq_lib.properties.session import Session
from lq_lib.workers.configurator import WorkerConfigurator, WorkersReport

from .env_file import BASIC_ENV, get_env_value, set_env_values

logger = get_logger(__name__)

# directories Laravel writes to at runtime
WRITABLE_DIRS = ["storage", "bootstrap/cache", "public/uploads"]

# (strategy name, composer flags), tried in order
COMPOSER_STRATEGIES = [
    ("optimized", ["--optimize-autoloader", "--no-dev", "--prefer-dist", "--no-interaction"]),
    ("with dev packages", ["--prefer-dist", "--no-interaction"]),
    ("from source", ["--prefer-source", "--no-interaction"]),
    ("verbose", ["--prefer-dist", "--no-interaction", "-vvv"]),
]


class Provisioner:
    """
    Prepares a Laravel project and its host for running queue workers.
    """

    def __init__(
        self,
        session: Session,
        answers: AnswerSource,
        commander: Commander | None = None,
    ):
        self._session = session
        self._answers = answers
        self._commander = commander or Commander()

    def provision(self, repository: str | None = None, prune: bool = False) -> WorkersReport | None:
        """
        Run all provisioning steps.

        Args:
            repository (str | None): Git repository to clone if the project does not exist yet.
            prune (bool): Remove Supervisor programs of queues that are no longer configured.

        Returns:
            WorkersReport | None: Summary of the queue configuration,
                None if the operator chose not to configure queues.

        Raises:
            LQError: If any of the mandatory steps fails.
        """
        self.installSupervisor()
        if repository:
            self.cloneRepository(repository)
        self._ensureProjectExists()
        self.fixPermissions()
        self.installComposerDependencies()
        self.linkStorage()

        report = None
        if self._answers.confirm(
            "configure_workers", "Do you want to configure Laravel Queue with Supervisor?"
        ):
            configurator = WorkerConfigurator(self._session, self._answers, self._commander)
            report = configurator.run(prune=prune, on_drivers=self.writeEnvDrivers)

        self.installRedis(report.drivers if report else None)

        logger.info("Applying final permission fixes.")
        self.fixPermissions()
        return report

    def installSupervisor(self) -> None:
        """
        Install Supervisor and make sure it runs.

        Raises:
            LQError: If Supervisor cannot be installed or started.
        """
        self._installService("supervisor", "supervisor")

    def installRedis(self, drivers: DriverSelection | None) -> bool:
        """
        Install Redis if any driver needs it, or if the operator wants it for future use.

        Args:
            drivers (DriverSelection | None): Selected drivers. None if no drivers were selected.

        Returns:
            bool: True if Redis was installed.

        Raises:
            LQError: If Redis cannot be installed or started.
        """
        needed = drivers is not None and drivers.needs_in_memory_store
        if not needed and not self._answers.confirm(
            "install_redis",
            "Do you want to install Redis for future use (caching/sessions/queues)?",
        ):
            return False

        self._installService("redis-server", "redis-server")
        return True

    def cloneRepository(self, repository: str) -> None:
        """
        Clone the project unless its directory already exists.

        Raises:
            LQError: If the repository cannot be cloned.
        """
        path = self._session.project_path
        if path.exists():
            logger.info(f"Project directory '{path}' already exists. Skipping clone.")
            return

        logger.info(f"Cloning '{repository}' into '{path}'.")
        try:
            self._commander.run(["git", "clone", repository, str(path)])
        except LQError as e:
            raise LQError(f"Failed to clone repository '{repository}'. {e}") from e

    def installComposerDependencies(self) -> ChainResult:
        """
        Install the PHP dependencies of the project, trying progressively less strict strategies.

        Exact versions are installed if the project ships `composer.lock`,
        otherwise the dependencies are resolved to their latest versions.
        If all strategies fail, the operator decides whether to continue without them.

        Returns:
            ChainResult: The strategy that succeeded, if any.

        Raises:
            LQError: If all strategies fail and the operator does not want to continue.
        """
        mode = "install" if (self._session.project_path / "composer.lock").is_file() else "update"
        logger.info(f"Installing Composer dependencies using 'composer {mode}'.")

        chain = FallbackChain("Composer dependencies")
        for name, flags in COMPOSER_STRATEGIES:
            chain.add(name, self._composer, mode, flags)

        result = chain.run()
        if result.succeeded:
            logger.info(f"Composer dependencies installed ({result.strategy}).")
            return result

        if self._answers.confirm(
            "continue_without_composer",
            "Do you want to continue without composer dependencies? (Not recommended)",
        ):
            logger.warning(
                "Continuing without dependencies. Run 'composer install' manually later."
            )
            return result

        raise LQError("Failed to install Composer dependencies.")

    def writeEnvDrivers(self, drivers: DriverSelection) -> Path:
        """
        Select the drivers in the project's `.env` file.

        A missing `.env` is created from `.env.example`, or from a basic
        template if the project has no example file.

        Returns:
            Path: Path to the `.env` file.

        Raises:
            LQError: If the file cannot be read or written.
        """
        env = self._session.project_path / ".env"
        example = self._session.project_path / ".env.example"

        try:
            if env.is_file():
                content = env.read_text()
            elif example.is_file():
                content = example.read_text()
            else:
                logger.warning("No .env.example found. Creating a basic .env file.")
                content = BASIC_ENV
        except OSError as e:
            raise LQError(f"Could not read the environment file of the project: {e}.") from e

        values = drivers.toEnv()
        for key, value in values.items():
            previous = get_env_value(content, key)
            if previous is None:
                logger.info(f"Setting {key} to '{value}'.")
            elif previous != value:
                logger.info(f"Changing {key} from '{previous}' to '{value}'.")

        service = self._session.service
        self._commander.writeFile(env, set_env_values(content, values))
        self._commander.chown(env, service.user, service.group)
        self._commander.chmod(env, 0o644)

        logger.info(f"Updated drivers in '{env}'.")
        return env

    def fixPermissions(self) -> None:
        """
        Give the project to the service user and make Laravel's runtime directories writable.

        Raises:
            LQError: If ownership or permissions cannot be changed.
        """
        path = self._session.project_path
        service = self._session.service
        logger.info("Setting permissions for the Laravel project.")

        for directory in WRITABLE_DIRS:
            self._commander.makeDirs(path / directory)

        self._commander.chown(path, service.user, service.group, recursive=True)
        self._commander.run(["find", str(path), "-type", "d", "-exec", "chmod", "755", "{}", "+"])
        self._commander.run(["find", str(path), "-type", "f", "-exec", "chmod", "644", "{}", "+"])

        if (path / "artisan").is_file():
            self._commander.chmod(path / "artisan", 0o755)

        for directory in WRITABLE_DIRS:
            self._commander.run(["chmod", "-R", "775", str(path / directory)])

        if Commander.available("setfacl"):
            acl_commands = [
                ["setfacl", "-R", *default, "-m", f"u:{service.user}:rwx", str(path / directory)]
                for default in ([], ["-d"])
                for directory in WRITABLE_DIRS[:2]
            ]
            repeater = Repeater(acl_commands, self._commander.run)
            repeater.onException(LQError, handle_best_effort_error)
            repeater.run()

    def linkStorage(self) -> None:
        """
        Link the public storage directory. A failure only produces a warning.
        """
        try:
            self._artisan("storage:link")
        except LQError as e:
            logger.warning(f"Storage link already exists or failed to create. {e}")

    def _ensureProjectExists(self) -> None:
        if not (self._session.project_path / "artisan").is_file():
            raise LQError(
                f"'{self._session.project_path}' is not a Laravel project (no artisan file found)."
            )

    def _installService(self, package: str, service: str) -> None:
        """
        Install a package and enable and start its service.
        """
        logger.info(f"Installing {package}.")
        try:
            self._commander.run(["apt-get", "install", "-y", package])
            self._commander.run(["systemctl", "enable", service])
            self._commander.run(["systemctl", "start", service])
        except LQError as e:
            raise LQError(f"Failed to install {package}. {e}") from e

        logger.info(f"{package} installed and started.")

    def _composer(self, mode: str, flags: list[str]) -> None:
        self._commander.run(
            ["composer", mode, *flags],
            as_user=self._session.service.user,
            cwd=self._session.project_path,
        )

    def _artisan(self, *args: str) -> None:
        self._commander.run(
            ["php", "artisan", *args],
            as_user=self._session.service.user,
            cwd=self._session.project_path,
        )
