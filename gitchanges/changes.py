"""File change records and parsing of ``git diff --name-status`` output."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class FileStatus(enum.Enum):
    """How a file changed between two revisions."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"

    @classmethod
    def from_code(cls, code: str) -> FileStatus:
        """Map a git status letter to a status; anything unknown counts as modified."""
        if code == "A":
            return cls.ADDED
        if code == "D":
            return cls.DELETED
        return cls.MODIFIED


@dataclass(frozen=True)
class FileChange:
    """A single changed file."""

    path: str
    status: FileStatus


def parse_name_status(output: str) -> dict[str, FileChange]:
    """Parse ``git diff --name-status`` output into a mapping of path to change.

    Lines with fewer than two whitespace-separated fields are ignored.
    """
    changes: dict[str, FileChange] = {}
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        code, path = parts[0], parts[1]
        status = FileStatus.from_code(code)
        logger.debug("file change %s: %s", path, status.name)
        changes[path] = FileChange(path=path, status=status)
    logger.debug("parsed %d file changes", len(changes))
    return changes