"""Cloning repositories and checking them for unpublished work."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from gitworkon.runner import CommandError, OSExec

logger = logging.getLogger(__name__)


class GitError(Exception):
    """A GIT operation failed."""


@dataclass(frozen=True)
class GitProjectState:
    """Unpublished work found in a repository."""

    stashes: str = ""
    tags: str = ""
    commits: str = ""
    status: str = ""

    def is_clean(self) -> bool:
        """True when nothing would be lost by removing the repository."""
        return not any(getattr(self, f.name) for f in fields(self))

    def __str__(self) -> str:
        parts = []
        if self.stashes:
            parts.append(f"Stashes:\n{self.stashes}")
        if self.tags:
            parts.append(f"\nTags:\n{self.tags}")
        if self.commits:
            parts.append(f"\nCommits:\n{self.commits}")
        if self.status:
            parts.append(f"\nStatus:\n{self.status}")
        return "".join(parts)


class GitAPI:
    """GIT operations carried out through the ``git`` command."""

    def __init__(self, cmd=None) -> None:
        self.cmd = cmd if cmd is not None else OSExec()

    def get_project_state(self, path: str) -> GitProjectState:
        """Collect stashes, unpushed tags, unpushed commits and local changes."""
        logger.info('getting Git status for "%s"', path)
        checks = (
            ("stashes", self._stashes),
            ("tags", self._tags),
            ("commits", self._commits),
            ("status", self._status),
        )
        found = {}
        for name, check in checks:
            try:
                found[name] = check(path)
            except CommandError as exc:
                raise GitError(f'failed to get {name} for "{path}": {exc}') from exc
        return GitProjectState(**found)

    def clone(self, source: str, destination: str) -> None:
        """Clone ``source`` into ``destination``."""
        logger.info('cloning "%s" to "%s"', source, destination)
        try:
            self.cmd.run("git", ["clone", source, destination])
        except CommandError as exc:
            raise GitError(
                f'failed to clone "{source}" to "{destination}": {exc}'
            ) from exc

    def _git(self, path: str, *args: str):
        return self.cmd.run_cwd(path, "git", list(args))

    def _stashes(self, path: str) -> str:
        return self._git(path, "stash", "list").stdout

    def _tags(self, path: str) -> str:
        stderr = self._git(path, "push", "--tags", "--dry-run").stderr
        return stderr if "new tag" in stderr else ""

    def _commits(self, path: str) -> str:
        return self._git(
            path, "log", "--branches", "--not", "--remotes", "--decorate", "--oneline"
        ).stdout

    def _status(self, path: str) -> str:
        return self._git(path, "status", "--short").stdout