"""File-system operations on project directories."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from gitworkon.runner import CommandError, OSExec

logger = logging.getLogger(__name__)


class FileSystemError(Exception):
    """A file-system operation failed."""


class OSFileSystem:
    """File-system access backed by the operating system."""

    def __init__(self, cmd=None) -> None:
        self.cmd = cmd if cmd is not None else OSExec()

    def exists(self, path: str) -> bool:
        """Whether ``path`` exists."""
        logger.info('checking whether "%s" exists', path)
        try:
            os.stat(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise FileSystemError(f'failed to check whether "{path}" exists: {exc}') from exc
        return True

    def open(self, path: str, editor: str) -> None:
        """Open ``path`` in ``editor``, attached to the terminal."""
        logger.info('opening "%s" with "%s" editor', path, editor)
        try:
            self.cmd.shell_run(editor, [os.fspath(path)])
        except (CommandError, OSError) as exc:
            raise FileSystemError(
                f'failed to open "{path}" with "{editor}" editor: {exc}'
            ) from exc

    def remove(self, path: str) -> None:
        """Remove ``path`` and everything below it; a missing path is fine."""
        logger.info('removing "%s"', path)
        target = Path(path)
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            else:
                target.unlink(missing_ok=True)
        except OSError as exc:
            raise FileSystemError(f'failed to remove "{path}": {exc}') from exc

    def get_git_repos(self, directory: str) -> list[str]:
        """Names of the entries of ``directory`` that are GIT repositories, sorted."""
        logger.info('gathering GIT directories from "%s"', directory)
        try:
            names = sorted(entry.name for entry in os.scandir(directory))
        except OSError as exc:
            raise FileSystemError(
                f'failed to get directories from "{directory}": {exc}'
            ) from exc
        return [name for name in names if (Path(directory) / name / ".git").is_dir()]