"""Access to git through the command-line client."""

from __future__ import annotations

import abc
import logging
import os
import shutil
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from .errors import GitCommandError, TempDirError

logger = logging.getLogger(__name__)


class Git(abc.ABC):
    """Git operations the change processor relies on."""

    @abc.abstractmethod
    def clone_repo(self, url: str) -> None:
        """Clone the repository at ``url`` into the working directory."""

    @abc.abstractmethod
    def get_file_content(self, ref_name: str, path: str) -> str | None:
        """Return the content of ``path`` at ``ref_name``, or None if unavailable."""

    @abc.abstractmethod
    def run_git_command(self, args: Sequence[str]) -> str:
        """Run git with ``args`` and return its trimmed standard output."""

    @abc.abstractmethod
    def run_git_command_to_file(
        self, args: Sequence[str], output_file_path: str | os.PathLike[str]
    ) -> None:
        """Run git with ``args`` and write its standard output to a file."""

    @abc.abstractmethod
    def checkout_branch(self, branch: str) -> None:
        """Check out ``branch``."""

    @abc.abstractmethod
    def discover_default_branch(self) -> str:
        """Return the remote's default branch, such as ``origin/main``."""


def _run(args: Sequence[str], cwd: str | os.PathLike[str]) -> subprocess.CompletedProcess[bytes]:
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            stdin=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        raise GitCommandError(str(exc)) from exc


def _stderr(result: subprocess.CompletedProcess[bytes]) -> str:
    return result.stderr.decode("utf-8", errors="replace")


def _decode(data: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise GitCommandError(str(exc)) from exc


class GitCli(Git):
    """Git operations carried out by the ``git`` executable in a repository directory."""

    def __init__(self, repo_path: str | os.PathLike[str]) -> None:
        self.repo_path = Path(repo_path)
        self._temp_dir: Path | None = None

    @classmethod
    def with_temp_workspace(cls) -> GitCli:
        """Create an instance whose repository path is a fresh temporary directory.

        The directory is removed by :meth:`close` or on leaving a ``with`` block.
        """
        logger.debug("creating temporary workspace")
        try:
            temp_dir = tempfile.mkdtemp(prefix="gitchanges-")
        except OSError as exc:
            raise TempDirError(str(exc)) from exc
        git = cls(temp_dir)
        git._temp_dir = git.repo_path
        logger.debug("temporary workspace created at %s", temp_dir)
        return git

    def close(self) -> None:
        """Remove the temporary workspace, if this instance owns one."""
        if self._temp_dir is not None:
            shutil.rmtree(self._temp_dir, ignore_errors=True)
            self._temp_dir = None

    def __enter__(self) -> GitCli:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def clone_repo(self, url: str) -> None:
        try:
            cwd = os.getcwd()
        except OSError:
            cwd = "/"
        result = _run(["clone", url, str(self.repo_path)], cwd)
        if result.returncode != 0:
            error = _stderr(result)
            logger.debug("clone of %s failed: %s", url, error)
            raise GitCommandError(error)
        logger.debug("cloned %s into %s", url, self.repo_path)

    def get_file_content(self, ref_name: str, path: str) -> str | None:
        result = _run(["show", f"{ref_name}:{path}"], self.repo_path)
        if result.returncode != 0:
            logger.debug("%s:%s not found (status %d)", ref_name, path, result.returncode)
            return None
        content = _decode(result.stdout)
        logger.debug("retrieved %d characters of %s:%s", len(content), ref_name, path)
        return content

    def run_git_command(self, args: Sequence[str]) -> str:
        result = _run(args, self.repo_path)
        if result.returncode != 0:
            error = _stderr(result)
            logger.debug("git %s failed: %s", list(args), error)
            raise GitCommandError(error)
        output = _decode(result.stdout).strip()
        logger.debug("git %s produced %d characters", list(args), len(output))
        return output

    def run_git_command_to_file(
        self, args: Sequence[str], output_file_path: str | os.PathLike[str]
    ) -> None:
        result = _run(args, self.repo_path)
        if result.returncode != 0:
            error = _stderr(result)
            logger.debug("git %s to file failed: %s", list(args), error)
            raise GitCommandError(error)
        target = Path(output_file_path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(result.stdout)
        logger.debug("wrote %d bytes to %s", len(result.stdout), target)

    def checkout_branch(self, branch: str) -> None:
        result = _run(["checkout", branch], self.repo_path)
        if result.returncode != 0:
            error = _stderr(result)
            logger.debug("checkout of %s failed: %s", branch, error)
            raise GitCommandError(error)
        logger.debug("checked out %s", branch)

    def discover_default_branch(self) -> str:
        branch = self.run_git_command(["symbolic-ref", "refs/remotes/origin/HEAD", "--short"])
        logger.debug("default branch is %s", branch)
        return branch