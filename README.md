# gitworkon

`gw` is a small command-line tool for a working directory full of Git projects.
It clones projects from the sources you configure. When you are finished, it
removes a project only if nothing is left unpublished in it: no stashes, no
unpushed tags, no commits that are missing from a remote and no uncommitted
changes.

`gw` runs the `git` command, so `git` must be on your `PATH`.

## Installation

```
pip install .
```

## Configuration

The configuration is the file `git_workon/config.json` in the user
configuration directory. If the file is missing, `gw` writes a default one and
stops with an error so that you can fill it in. The default has these values:

```json
{
  "dir": "~/.workon",
  "editor": "vi",
  "sources": []
}
```

- `dir`: the working directory that projects are cloned into. A leading `~`
  is replaced with your home directory. `gw` creates this directory if it is
  missing, but not its parent directories.
- `editor`: the editor that `gw go --open` tries after the one given with
  `-e/--editor`.
- `sources`: base locations to clone from. A project `name` is cloned from
  `<source>/name`, and the sources are tried in turn until one works.

To print the configuration in use as indented JSON:

```
gw config
```

## Starting work

```
gw go <project>... [-s SOURCE]... [-o] [-e EDITOR] [-d DIRECTORY]
```

Each project is cloned into the working directory unless it is there already.
`-d/--directory` sets a different working directory for this run.

Sources are tried in this order:

1. the sources given with `-s/--source`. The option may be repeated, and one
   value may hold several sources separated by commas;
2. the source the project was last cloned from successfully. This is kept in
   the cache file `git_workon/projects.json` in the user cache directory;
3. the sources from the configuration.

A project that cannot be cloned from any source is reported, and `gw` goes on
to the next project. The command fails only if no project could be started.

With `-o/--open`, the last project that was started is opened in an editor.
The editors are tried in this order until one exits successfully:

1. the one given with `-e/--editor`;
2. the configured `editor`;
3. `$EDITOR`;
4. `vim`, then `vi`.

## Finishing work

```
gw done [<project>...] [-f] [-d DIRECTORY]
```

Removes the named projects from the working directory. When no project is
named, every entry of the working directory that has a `.git` directory is
used. The projects are checked in parallel.

A project that still has stashes, unpushed tags, unpushed commits or local
changes is kept, and what is left in it is logged. `-f/--force` removes the
projects without checking them.

## Output and exit status

Progress is logged to standard error. If a command fails, `gw` prints
`Error: <message>` to standard error and exits with status 1. Otherwise it
exits with status 0.

## Using it from Python

The command is built from a few pieces that can also be used on their own:

- `gitworkon.config.load_config(path=None)` returns a `Config` with `dir`,
  `editor` and `sources`. It raises `ConfigError` when the file is missing or
  invalid.
- `gitworkon.cache.load_cache(path=None)` returns a `Cache` of `ProjectInfo`
  records, creating an empty cache file if there is none.
- `gitworkon.workdir.WorkingDir(directory, config, cache, git=None, fs=None)`
  has `go(projects, sources, editor="", open_editor=False)` and
  `done(projects, force=False)`. `go` raises `WorkdirError` when it cannot start
  any project or open any editor.
- `gitworkon.git.GitAPI` clones repositories and returns a `GitProjectState`
  through `get_project_state(path)`. `GitProjectState.is_clean()` tells whether
  anything unpublished was found.
- `gitworkon.fs.OSFileSystem` and `gitworkon.runner.OSExec` wrap the file
  system and the running of commands.

## What it does not do

`gw` has no command to change the configuration. Edit `config.json` by hand.

## Development

```
pip install -e ".[test]"
pytest
```