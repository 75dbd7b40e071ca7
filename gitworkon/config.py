"""User configuration stored as JSON."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import platformdirs

logger = logging.getLogger(__name__)

_APP_NAME = "git_workon"


class ConfigError(Exception):
    """The configuration is missing or cannot be read."""


def default_config_path() -> Path:
    """Location of the configuration file in the user's config directory."""
    return Path(platformdirs.user_config_dir(_APP_NAME, appauthor=False)) / "config.json"


@dataclass
class Config:
    """Working directory, editor and the list of GIT sources."""

    dir: str = "~/.workon"
    editor: str = "vi"
    sources: list[str] = field(default_factory=list)

    def to_json(self) -> str:
        """Render the configuration as indented JSON."""
        return json.dumps(asdict(self), indent=2)

    def __str__(self) -> str:
        return self.to_json()


def _string(raw: dict[str, Any], key: str, path: Path) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"failed to decode configuration from {path}: {key!r} must be a string")
    return value


def _sources(raw: dict[str, Any], path: Path) -> list[str]:
    value = raw.get("sources")
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(
            f"failed to decode configuration from {path}: 'sources' must be a list of strings"
        )
    return list(value)


def load_config(path: str | Path | None = None) -> Config:
    """Read the configuration, expanding a leading ``~`` in the directory.

    When the file is missing a default one is written and ConfigError is
    raised, so the user can fill it in.
    """
    config_path = Path(path) if path is not None else default_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigError(
            f"failed to ensure the configuration directory exists: {exc}"
        ) from exc

    if not config_path.exists():
        try:
            config_path.write_text(json.dumps(asdict(Config())) + "\n", encoding="utf-8")
        except OSError as exc:
            raise ConfigError(
                f"failed to create the configuration file at {config_path}: {exc}"
            ) from exc
        raise ConfigError(f"missing configuration at {config_path}")

    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"failed to open configuration file at {config_path}: {exc}"
        ) from exc

    try:
        raw = json.loads(text)
    except ValueError as exc:
        raise ConfigError(
            f"failed to decode configuration from {config_path}: {exc}"
        ) from exc
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"failed to decode configuration from {config_path}: not an object")

    config = Config(
        dir=_string(raw, "dir", config_path),
        editor=_string(raw, "editor", config_path),
        sources=_sources(raw, config_path),
    )

    if config.dir.startswith("~"):
        try:
            home = str(Path.home())
        except RuntimeError as exc:
            raise ConfigError(f"failed to get home directory: {exc}") from exc
        config.dir = config.dir.replace("~", home, 1)

    return config