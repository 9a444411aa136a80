"""Exceptions raised by gitchanges."""

from __future__ import annotations


class GitChangesError(Exception):
    """Base class for all errors raised by this package."""


class GitCommandError(GitChangesError):
    """A git command could not be started or exited unsuccessfully."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Git command failed: {detail}")
        self.detail = detail


class TempDirError(GitChangesError):
    """A temporary workspace could not be created."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to create temporary directory: {detail}")
        self.detail = detail