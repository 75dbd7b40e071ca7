"""Per-project cache of the source each project was cloned from."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

import platformdirs

logger = logging.getLogger(__name__)

_APP_NAME = "git_workon"


def default_cache_path() -> Path:
    """Location of the cache file in the user's cache directory."""
    return Path(platformdirs.user_cache_dir(_APP_NAME, appauthor=False)) / "projects.json"


@dataclass(frozen=True)
class ProjectInfo:
    """What is remembered about a project."""

    source: str = ""


@dataclass
class Cache:
    """Project information keyed by project name, stored as JSON."""

    data: dict[str, ProjectInfo] = field(default_factory=dict)
    path: Path = field(default_factory=default_cache_path)

    def get(self, project: str) -> ProjectInfo:
        """Return what is known about ``project``, or an empty record."""
        return self.data.get(project, ProjectInfo())

    def set(self, project: str, info: ProjectInfo) -> None:
        """Remember ``info`` for ``project``."""
        self.data[project] = info

    def write(self) -> None:
        """Store the cache on disk; failures are logged, not raised."""
        payload = {name: asdict(info) for name, info in self.data.items()}
        try:
            Path(self.path).write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("failed to write the cache file at %s: %s", self.path, exc)


def _parse(text: str, path: Path) -> dict[str, ProjectInfo]:
    raw = json.loads(text)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"failed to unmarshal the cache file at {path}: not an object")
    data: dict[str, ProjectInfo] = {}
    for name, info in raw.items():
        if info is None:
            data[name] = ProjectInfo()
            continue
        if not isinstance(info, dict):
            raise ValueError(
                f"failed to unmarshal the cache file at {path}: bad entry {name!r}"
            )
        source = info.get("source") or ""
        if not isinstance(source, str):
            raise ValueError(
                f"failed to unmarshal the cache file at {path}: bad source for {name!r}"
            )
        data[name] = ProjectInfo(source=source)
    return data


def _create(path: Path) -> Cache:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("failed to create cache dirs %s: %s", path.parent, exc)
        return Cache({}, path)

    try:
        with path.open("x", encoding="utf-8") as handle:
            handle.write("{}\n")
    except FileExistsError:
        return load_cache(path)
    except OSError as exc:
        logger.error("failed to create cache file %s: %s", path, exc)
    return Cache({}, path)


def load_cache(path: str | Path | None = None) -> Cache:
    """Read the cache file, creating an empty one if it does not exist.

    Raises OSError if the file cannot be read and ValueError if it is not
    a valid cache.
    """
    cache_path = Path(path) if path is not None else default_cache_path()
    try:
        text = cache_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return _create(cache_path)
    return Cache(_parse(text, cache_path), cache_path)