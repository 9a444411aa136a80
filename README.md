# gitchanges

Find out which files changed on a Git branch or in a single commit. You can
also export their new contents and diffs into a directory. The package is
meant for CI jobs that should only act on the files a change touched.

The `git` executable must be on the `PATH`.

## Installation

```
pip install .
```

## Command line

List the files changed on a branch relative to the remote's default branch
(`refs/remotes/origin/HEAD`):

```
git-changes --repo . --branch feature-branch
```

Compare against a particular branch instead:

```
git-changes --repo . --branch feature-branch --target-branch main
```

List the files changed by one commit, compared with its first parent:

```
git-changes --repo . --commit 3f2a9c1
```

If the commit is not present locally, the tool fetches it from `origin` first.

### Options

`--branch` and `--commit` are mutually exclusive, and you must give one of them.
In branch mode the tool checks out the branch in the repository before it
compares. It compares using the merge base (`target...branch`).

Add `--output-dir DIR` to any of the commands above to export the changes:

- Added files are written to `DIR/<path>` with their contents at the branch or
  commit.
- Modified files are written the same way. A diff is also written beside each
  one as `DIR/<path>.diff`.
- Deleted files are listed, but nothing is written for them.

`--repo` takes a local path or a remote URL that starts with `https://` or
`git@`. A remote repository is cloned into a temporary directory, which is
removed when the run ends.

`--log LEVEL` sets how much diagnostic output goes to standard error. The
levels are `off`, `error`, `warn`, `info`, `debug` and `trace`. The default is
`error`.

### Output and exit status

Each run ends with a summary of the added, modified and deleted files, sorted
by path. If a `git` command fails, the tool prints `Error: ...` to standard
error and exits with status 1.

## Library

```python
from pathlib import Path

from gitchanges.changes import FileStatus
from gitchanges.processor import open_processor

with open_processor(".") as processor:
    changes = processor.export_branch_changes("feature-branch", "main", Path("out"))

for path, change in sorted(changes.items()):
    if change.status is FileStatus.MODIFIED:
        print("modified:", path)
```

### Processor methods

`GitChangesProcessor` (in `gitchanges.processor`) also offers these methods:

- `list_branch_changes`
- `list_changes_from_default_branch`
- `list_commit_changes`
- `export_changes_from_default_branch`
- `export_commit_changes`

Each method returns a dictionary that maps a path to a `FileChange`. A
`FileChange` has a `path` and a `status`, which is one of `FileStatus.ADDED`,
`FileStatus.MODIFIED` or `FileStatus.DELETED`.

### Creating a processor

- `GitChangesProcessor.from_local(path)` uses a repository that is already on
  disk.
- `GitChangesProcessor.from_source(repo)` (or `open_processor(repo)`) also
  accepts a remote URL. Call `close()` to remove the temporary clone, or use
  the processor in a `with` block.

### Lower-level pieces

- `gitchanges.changes.parse_name_status(output)` parses
  `git diff --name-status` output.
- `gitchanges.git.GitCli` runs individual `git` commands in a repository
  directory.

### Errors

- A failed `git` command raises `gitchanges.errors.GitCommandError`.
- A temporary workspace that cannot be created raises
  `gitchanges.errors.TempDirError`.

Both derive from `GitChangesError`.

## Running the tests

```
pip install .[test]
pytest
```