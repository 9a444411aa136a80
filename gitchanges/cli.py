"""Command-line interface for listing and exporting changed files."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Mapping, Sequence

from .changes import FileChange, FileStatus
from .errors import GitChangesError
from .processor import GitChangesProcessor, open_processor

_LOG_LEVELS = {
    "off": logging.CRITICAL + 10,
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": logging.DEBUG - 5,
}


def format_changes_summary(changes: Mapping[str, FileChange]) -> str:
    """Render a human-readable summary of changes, grouped by status and sorted by path."""
    grouped: dict[FileStatus, list[str]] = {status: [] for status in FileStatus}
    for path, change in changes.items():
        grouped[change.status].append(path)
    added = sorted(grouped[FileStatus.ADDED])
    modified = sorted(grouped[FileStatus.MODIFIED])
    deleted = sorted(grouped[FileStatus.DELETED])

    lines = [
        "",
        "📊 Changes Summary:",
        "==================",
        f"Total files: {len(changes)}",
        f"  Added:    {len(added)}",
        f"  Modified: {len(modified)}",
        f"  Deleted:  {len(deleted)}",
    ]
    sections = (
        ("✨ Added Files:", "+", added),
        ("🔄 Modified Files:", "~", modified),
        ("❌ Deleted Files:", "-", deleted),
    )
    for title, marker, paths in sections:
        if paths:
            lines.extend(["", title])
            lines.extend(f"  {marker} {path}" for path in paths)
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the command."""
    parser = argparse.ArgumentParser(
        prog="git-changes",
        description="Detect and process file changes in Git repositories for CI environments",
    )
    parser.add_argument(
        "-r", "--repo", required=True, help="Git repository (HTTPS/SSH URL or local path)"
    )
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("-b", "--branch", help="Branch to analyze")
    target.add_argument("-c", "--commit", help="Commit to analyze")
    parser.add_argument(
        "-t",
        "--target-branch",
        help="Target branch to compare against (defaults to origin/HEAD)",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        help="Output directory for changes (if not provided, only lists changes)",
    )
    parser.add_argument(
        "-l",
        "--log",
        choices=list(_LOG_LEVELS),
        default="error",
        help="Log level",
    )
    return parser


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS[level_name],
        format="%(asctime)s %(levelname)s %(name)s %(filename)s:%(lineno)d: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _collect(processor: GitChangesProcessor, args: argparse.Namespace) -> dict[str, FileChange]:
    if args.output_dir is not None:
        if args.branch is not None:
            if args.target_branch is not None:
                return processor.export_branch_changes(
                    args.branch, args.target_branch, args.output_dir
                )
            return processor.export_changes_from_default_branch(args.branch, args.output_dir)
        return processor.export_commit_changes(args.commit, args.output_dir)
    if args.branch is not None:
        if args.target_branch is not None:
            return processor.list_branch_changes(args.branch, args.target_branch)
        return processor.list_changes_from_default_branch(args.branch)
    return processor.list_commit_changes(args.commit)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = build_parser().parse_args(argv)
    _configure_logging(args.log)
    try:
        with open_processor(args.repo) as processor:
            changes = _collect(processor, args)
    except (GitChangesError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(format_changes_summary(changes))
    return 0


if __name__ == "__main__":
    sys.exit(main())