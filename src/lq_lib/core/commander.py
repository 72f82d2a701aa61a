# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Execution of external commands.

Package managers, service managers, Supervisor, composer and artisan are all
treated as opaque programs. The `Commander` runs them, optionally through sudo,
and converts failures into `LQError`s.
"""

import shlex
import shutil
import subprocess
from pathlib import Path

from .config import CFG
from .error import LQError
from .logger import get_logger

logger = get_logger(__name__)


class Commander:
    """
    Runs external commands and writes privileged files.

    Attributes:
        use_sudo (bool): Prefix privileged commands with `sudo`.
        cwd (Path | None): Working directory of the executed commands.
    """

    def __init__(self, use_sudo: bool | None = None, cwd: Path | None = None):
        self.use_sudo = CFG.commands.use_sudo if use_sudo is None else use_sudo
        self.cwd = cwd

    def run(
        self,
        command: list[str],
        as_user: str | None = None,
        input: str | None = None,
        check: bool = True,
        cwd: Path | None = None,
    ) -> subprocess.CompletedProcess[str]:
        """
        Run a command and capture its output.

        Args:
            command (list[str]): The command and its arguments.
            as_user (str | None): Run the command as this user instead of root.
            input (str | None): Text passed to the standard input of the command.
            check (bool): Raise an error if the command exits with a non-zero code.
            cwd (Path | None): Working directory overriding the default one.

        Returns:
            subprocess.CompletedProcess[str]: The finished process.

        Raises:
            LQError: If the command cannot be started, or if it fails and `check` is set.
        """
        full_command = self._prefix(as_user) + command
        logger.debug(f"Running '{shlex.join(full_command)}'.")

        try:
            result = subprocess.run(
                full_command,
                input=input,
                text=True,
                check=False,
                capture_output=True,
                errors="replace",
                cwd=cwd or self.cwd,
            )
        except OSError as e:
            raise LQError(f"Could not run '{shlex.join(command)}': {e}.") from e

        if check and result.returncode != 0:
            raise LQError(
                f"Command '{shlex.join(command)}' failed with exit code {result.returncode}: "
                f"{result.stderr.strip()}"
            )

        return result

    def writeFile(self, path: Path, content: str) -> None:
        """
        Create or overwrite a file with the given content.

        When sudo is in use, the file is written through `sudo tee`.

        Raises:
            LQError: If the file could not be written.
        """
        if self.use_sudo:
            self.run(["tee", str(path)], input=content)
            return

        try:
            path.write_text(content)
        except OSError as e:
            raise LQError(f"Could not write file '{path}': {e}.") from e

    def removeFile(self, path: Path) -> None:
        """
        Delete a file.

        Raises:
            LQError: If the file could not be deleted.
        """
        if self.use_sudo:
            self.run(["rm", "-f", str(path)])
            return

        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise LQError(f"Could not remove file '{path}': {e}.") from e

    def makeDirs(self, path: Path) -> None:
        """
        Create a directory including its parents.

        Raises:
            LQError: If the directory could not be created.
        """
        if self.use_sudo:
            self.run(["mkdir", "-p", str(path)])
            return

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LQError(f"Could not create directory '{path}': {e}.") from e

    def touch(self, path: Path) -> None:
        """
        Create an empty file if it does not exist. Existing content is kept.

        Raises:
            LQError: If the file could not be created.
        """
        if self.use_sudo:
            self.run(["touch", str(path)])
            return

        try:
            path.touch(exist_ok=True)
        except OSError as e:
            raise LQError(f"Could not create file '{path}': {e}.") from e

    def chown(self, path: Path, user: str, group: str, recursive: bool = False) -> None:
        """
        Change the owner of a file or directory.

        Raises:
            LQError: If the owner could not be changed.
        """
        if self.use_sudo:
            self.run(["chown"] + (["-R"] if recursive else []) + [f"{user}:{group}", str(path)])
            return

        targets = [path]
        if recursive and path.is_dir():
            targets.extend(path.rglob("*"))

        try:
            for target in targets:
                shutil.chown(target, user, group)
        except (OSError, LookupError) as e:
            raise LQError(f"Could not change owner of '{path}' to '{user}:{group}': {e}.") from e

    def chmod(self, path: Path, mode: int) -> None:
        """
        Change the permissions of a file or directory.

        Raises:
            LQError: If the permissions could not be changed.
        """
        if self.use_sudo:
            self.run(["chmod", f"{mode:o}", str(path)])
            return

        try:
            path.chmod(mode)
        except OSError as e:
            raise LQError(f"Could not change permissions of '{path}': {e}.") from e

    @staticmethod
    def available(binary: str) -> bool:
        """Check whether a binary can be found on the search path."""
        return shutil.which(binary) is not None

    def _prefix(self, as_user: str | None) -> list[str]:
        if not self.use_sudo:
            return []

        if as_user:
            return ["sudo", "-u", as_user]

        return ["sudo"]
