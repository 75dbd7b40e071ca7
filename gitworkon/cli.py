"""Command line interface: ``gw go``, ``gw done`` and ``gw config``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from gitworkon.cache import load_cache
from gitworkon.config import ConfigError, load_config
from gitworkon.fs import FileSystemError
from gitworkon.git import GitError
from gitworkon.workdir import WorkdirError, create_working_dir

_DESCRIPTION = """\
Easily clone projects from predefined sources.
Safely remove projects from the working directory (the tool will ensure you
have not left anything unpublished).

gw go <project> --open
gw done <project>
"""

_GO_DESCRIPTION = """\
Clone the project (if needed) into the working directory.
Sources from the configuration are used but may be extended by -s/--source.
Sources are resolved in the following order:
    * Defined by -s/--source
    * Cached for the project
    * Sources from the configuration

Use -o/--open to open the project in the configured editor.
Override the editor using -e/--editor.
"""


def ensure_dir(directory: str, config_dir: str) -> str:
    """Pick the working directory, falling back to ``config_dir``, and create it.

    Raises OSError when the directory cannot be created.
    """
    chosen = directory or config_dir
    try:
        Path(chosen).mkdir(mode=0o755)
    except FileExistsError:
        pass
    except OSError as exc:
        raise OSError(f'failed to create the directory "{chosen}": {exc}') from exc
    return chosen


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gw",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("config", help="Show the current config")

    done = commands.add_parser(
        "done",
        help="Finish the project",
        description="Remove the project(s) from the working directory",
    )
    done.add_argument("projects", nargs="*", metavar="project")
    done.add_argument("-d", "--directory", default="", help="working directory")
    done.add_argument("-f", "--force", action="store_true", help="force")

    go = commands.add_parser(
        "go",
        help="Start the project",
        description=_GO_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    go.add_argument("projects", nargs="+", metavar="project")
    go.add_argument(
        "-o", "--open", action="store_true", help="open the project in the configured editor"
    )
    go.add_argument("-d", "--directory", default="", help="working directory")
    go.add_argument(
        "-s", "--source", action="append", default=[], help="additional sources"
    )
    go.add_argument("-e", "--editor", default="", help="editor to use")

    return parser


def _split_sources(values: Sequence[str]) -> list[str]:
    return [part for value in values for part in value.split(",")]


def _run(args: argparse.Namespace) -> None:
    config = load_config()
    if args.command == "config":
        print(config)
        return

    cache = load_cache()
    directory = ensure_dir(args.directory, config.dir)
    wd = create_working_dir(directory, config, cache)

    if args.command == "go":
        wd.go(
            args.projects,
            _split_sources(args.source),
            args.editor,
            open_editor=args.open,
        )
    else:
        wd.done(args.projects, force=args.force)


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of ``gw``; returns the process exit status."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(message)s", stream=sys.stderr
    )
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    try:
        _run(args)
    except (ConfigError, WorkdirError, FileSystemError, GitError, OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())