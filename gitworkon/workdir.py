"""Starting and finishing projects inside a working directory."""

from __future__ import annotations

import logging
import os
import posixpath
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence

from gitworkon.cache import Cache, ProjectInfo
from gitworkon.config import Config
from gitworkon.fs import FileSystemError, OSFileSystem
from gitworkon.git import GitAPI, GitError
from gitworkon.runner import OSExec

logger = logging.getLogger(__name__)

_FALLBACK_EDITORS = ("vim", "vi")


class WorkdirError(Exception):
    """A project could not be started or opened."""


def _join(*elements: str) -> str:
    """Join slash-separated path elements and clean the result."""
    parts = [element for element in elements if element]
    if not parts:
        return ""
    joined = posixpath.normpath("/".join(parts))
    if joined.startswith("//"):
        joined = joined[1:]
    return joined


class WorkingDir:
    """A directory holding cloned projects."""

    def __init__(
        self,
        directory: str,
        config: Config,
        cache: Cache,
        git=None,
        fs=None,
    ) -> None:
        cmd = OSExec()
        self.directory = directory
        self.config = config
        self.cache = cache
        self.git = git if git is not None else GitAPI(cmd)
        self.fs = fs if fs is not None else OSFileSystem(cmd)

    def go(
        self,
        projects: Sequence[str],
        sources: Sequence[str],
        editor: str = "",
        open_editor: bool = False,
    ) -> None:
        """Clone the projects that are missing and optionally open the last one."""
        projects = list(projects)
        if not projects:
            raise WorkdirError("no projects to go specified")

        editors = self._editors(editor)
        merged = list(sources)
        last_project_path = ""

        for project in projects:
            merged = self._sources_for(project, merged)
            if not merged:
                raise WorkdirError("no GIT sources specified")

            project_path = self._project_path(project)
            try:
                exists = self.fs.exists(project_path)
            except FileSystemError as exc:
                logger.error('failed to check whether "%s" exists: %s', project, exc)
                continue
            if exists:
                last_project_path = project_path
                logger.info('"%s" already exists. No need to clone', project)
                continue

            try:
                self._clone(project, merged)
            except WorkdirError as exc:
                logger.error("%s", exc)
                continue
            last_project_path = project_path

        if not last_project_path:
            raise WorkdirError("failed to start any project")

        if open_editor:
            self._open(last_project_path, editors)

    def done(self, projects: Iterable[str], force: bool = False) -> None:
        """Remove the projects, or every repository here, that hold no unpublished work."""
        repos = list(projects)
        if not repos:
            repos = self.fs.get_git_repos(self.directory)
        if not repos:
            return

        with ThreadPoolExecutor(max_workers=len(repos)) as pool:
            list(pool.map(lambda repo: self._finish(repo, force), repos))

    def _clone(self, project: str, sources: Sequence[str]) -> None:
        destination = self._project_path(project)
        for source in sources:
            try:
                self.git.clone(_join(source, project), destination)
            except GitError as exc:
                logger.warning("%s\nTrying other sources...", exc)
                continue
            self.cache.set(project, ProjectInfo(source=source))
            self.cache.write()
            return
        raise WorkdirError(f'failed to clone "{project}". Tried all configured sources')

    def _open(self, path: str, editors: Sequence[str]) -> None:
        for editor in editors:
            try:
                self.fs.open(path, editor)
            except FileSystemError as exc:
                logger.warning("%s. Will try other editors", exc)
                continue
            return
        raise WorkdirError(f'failed to open "{path}". Tried all configured editors')

    def _finish(self, project: str, force: bool) -> None:
        project_path = self._project_path(project)

        if force:
            logger.info('forcefully removing "%s"', project_path)
            self._remove_safe(project_path)
            return

        try:
            state = self.git.get_project_state(project_path)
        except GitError as exc:
            logger.error('failed to get state of "%s": %s', project_path, exc)
            return

        if state.is_clean():
            self._remove_safe(project_path)
        else:
            logger.warning(
                '"%s" will not be removed: the project is not clean:\n%s',
                project_path,
                state,
            )

    def _remove_safe(self, path: str) -> None:
        try:
            self.fs.remove(path)
        except FileSystemError as exc:
            logger.error('failed to remove "%s": %s', path, exc)

    def _project_path(self, name: str) -> str:
        return _join(self.directory, name)

    def _editors(self, editor: str) -> list[str]:
        editors = []
        if editor:
            editors.append(editor)
        if self.config.editor:
            editors.append(self.config.editor)
        env_editor = os.environ.get("EDITOR")
        if env_editor is not None:
            editors.append(env_editor)
        editors.extend(_FALLBACK_EDITORS)
        return editors

    def _sources_for(self, project: str, sources: Sequence[str]) -> list[str]:
        merged = list(sources)
        cached = self.cache.get(project).source
        if cached:
            merged.append(cached)
        merged.extend(self.config.sources)
        return merged


def create_working_dir(directory: str, config: Config, cache: Cache) -> WorkingDir:
    """A working directory backed by the real ``git`` and file system."""
    return WorkingDir(directory, config, cache)