"""Running external commands and capturing what they print."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Captured output of a finished command."""

    stdout: str = ""
    stderr: str = ""


class CommandError(Exception):
    """A command could not be started or exited with a failure."""

    def __init__(self, message: str, result: CommandResult | None = None) -> None:
        super().__init__(message)
        self.result = result if result is not None else CommandResult()


def _exit_message(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status {returncode}"


class OSExec:
    """Runs commands as child processes of this one."""

    def run(self, name: str, args: Sequence[str]) -> CommandResult:
        """Run a command, capturing its output."""
        logger.info('executing "%s" with args %s', name, list(args))
        return self._capture([name, *args], cwd=None)

    def run_cwd(self, directory: str, name: str, args: Sequence[str]) -> CommandResult:
        """Run a command in ``directory``, capturing its output."""
        logger.info('executing "%s" with args %s in "%s"', name, list(args), directory)
        return self._capture([name, *args], cwd=directory)

    def shell_run(self, name: str, args: Sequence[str]) -> CommandResult:
        """Run a command attached to this process's terminal."""
        logger.info('executing "%s" with args %s', name, list(args))
        try:
            completed = subprocess.run([name, *args], check=False)
        except OSError as exc:
            raise CommandError(str(exc)) from exc
        if completed.returncode != 0:
            raise CommandError(_exit_message(completed.returncode))
        return CommandResult()

    @staticmethod
    def _capture(argv: list[str], cwd: str | None) -> CommandResult:
        try:
            completed = subprocess.run(
                argv, cwd=cwd, capture_output=True, text=True, check=False
            )
        except OSError as exc:
            raise CommandError(str(exc)) from exc

        result = CommandResult(stdout=completed.stdout, stderr=completed.stderr)
        if completed.returncode != 0:
            message = _exit_message(completed.returncode)
            if result.stderr:
                message = f"{message}.\n{result.stderr}"
            raise CommandError(message, result)
        return result