"""Detection and export of file changes between branches or within a commit."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .changes import FileChange, FileStatus, parse_name_status
from .errors import GitCommandError
from .git import Git, GitCli

logger = logging.getLogger(__name__)

_REMOTE_PREFIXES = ("https://", "git@")


def _is_remote(repo: str) -> bool:
    return repo.startswith(_REMOTE_PREFIXES)


class GitChangesProcessor:
    """Lists and exports the files that changed in a git repository."""

    def __init__(self, git: Git) -> None:
        self.git = git

    @classmethod
    def from_local(cls, path: str | os.PathLike[str]) -> GitChangesProcessor:
        """Create a processor for a repository already present on disk."""
        logger.debug("using local repository at %s", path)
        return cls(GitCli(path))

    @classmethod
    def from_source(cls, repo: str) -> GitChangesProcessor:
        """Create a processor from a local path or a remote HTTPS/SSH URL.

        A remote repository is cloned into a temporary workspace that is
        removed by :meth:`close`.
        """
        if not _is_remote(repo):
            return cls.from_local(repo)
        logger.debug("cloning remote repository %s", repo)
        git = GitCli.with_temp_workspace()
        try:
            git.clone_repo(repo)
        except BaseException:
            git.close()
            raise
        return cls(git)

    def close(self) -> None:
        """Release the temporary workspace of a cloned repository, if any."""
        if isinstance(self.git, GitCli):
            self.git.close()

    def __enter__(self) -> GitChangesProcessor:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def export_changes_from_default_branch(
        self, branch: str, output_dir: str | os.PathLike[str]
    ) -> dict[str, FileChange]:
        """Export changes of ``branch`` relative to the remote's default branch."""
        target_branch = self.git.discover_default_branch()
        logger.debug("default branch is %s", target_branch)
        return self.export_branch_changes(branch, target_branch, output_dir)

    def export_branch_changes(
        self, branch: str, target_branch: str, output_dir: str | os.PathLike[str]
    ) -> dict[str, FileChange]:
        """Export changes of ``branch`` relative to ``target_branch`` into ``output_dir``.

        Added and modified files are written with their content at ``branch``;
        modified files also get a ``.diff`` file next to them. Deleted files
        are not written.
        """
        self.git.checkout_branch(branch)
        changes = self._changes_for_branch(branch, target_branch)
        self._export(changes, branch, f"{target_branch}...{branch}", Path(output_dir))
        return changes

    def list_branch_changes(self, branch: str, target_branch: str) -> dict[str, FileChange]:
        """List changes of ``branch`` relative to ``target_branch``."""
        self.git.checkout_branch(branch)
        return self._changes_for_branch(branch, target_branch)

    def list_changes_from_default_branch(self, branch: str) -> dict[str, FileChange]:
        """List changes of ``branch`` relative to the remote's default branch."""
        self.git.checkout_branch(branch)
        target_branch = self.git.discover_default_branch()
        logger.debug("default branch is %s", target_branch)
        return self._changes_for_branch(branch, target_branch)

    def list_commit_changes(self, commit_hash: str) -> dict[str, FileChange]:
        """List the files changed by a single commit."""
        return self._changes_for_commit(commit_hash)

    def export_commit_changes(
        self, commit_hash: str, output_dir: str | os.PathLike[str]
    ) -> dict[str, FileChange]:
        """Export the files changed by a single commit into ``output_dir``."""
        changes = self._changes_for_commit(commit_hash)
        self._export(
            changes, commit_hash, f"{commit_hash}^..{commit_hash}", Path(output_dir)
        )
        return changes

    def _export(
        self,
        changes: dict[str, FileChange],
        revision: str,
        diff_range: str,
        output_dir: Path,
    ) -> None:
        for path, change in changes.items():
            logger.debug("exporting %s (%s)", path, change.status.name)
            if change.status is FileStatus.DELETED:
                continue
            self.git.run_git_command_to_file(["show", f"{revision}:{path}"], output_dir / path)
            if change.status is FileStatus.MODIFIED:
                self.git.run_git_command_to_file(
                    ["diff", diff_range, "--", path], output_dir / f"{path}.diff"
                )
        logger.debug("exported %d file changes", len(changes))

    def _changes_for_branch(self, branch: str, target_branch: str) -> dict[str, FileChange]:
        output = self.git.run_git_command(
            ["diff", "--name-status", "--no-renames", f"{target_branch}...{branch}"]
        )
        return parse_name_status(output)

    def _changes_for_commit(self, commit_hash: str) -> dict[str, FileChange]:
        try:
            self.git.run_git_command(["cat-file", "-e", commit_hash])
        except GitCommandError:
            logger.debug("commit %s not found locally, fetching", commit_hash)
            self.git.run_git_command(["fetch", "origin", commit_hash])
        output = self.git.run_git_command(
            ["diff", "--name-status", "--no-renames", f"{commit_hash}^", commit_hash]
        )
        return parse_name_status(output)


def open_processor(repo: str) -> GitChangesProcessor:
    """Create a processor for a local path or a remote HTTPS/SSH URL."""
    return GitChangesProcessor.from_source(repo)