import subprocess
from pathlib import Path

import pytest

from gitchanges.changes import FileStatus
from gitchanges.errors import GitCommandError
from gitchanges.git import Git, GitCli
from gitchanges.processor import GitChangesProcessor, open_processor


def _git(cwd, *args):
    result = subprocess.run(
        ["git", "-c", "commit.gpgsign=false", *args],
        cwd=cwd,
        capture_output=True,
        check=True,
    )
    return result.stdout.decode().strip()


@pytest.fixture
def repo(tmp_path):
    root = tmp_path / "repo"
    (root / "dir1").mkdir(parents=True)
    (root / "file1.txt").write_text("original content")
    (root / "dir1" / "file2.txt").write_text("file 2 content")
    _git(root, "init")
    _git(root, "config", "user.name", "Test User")
    _git(root, "config", "user.email", "test@example.com")
    _git(root, "add", ".")
    _git(root, "commit", "-m", "Initial commit")
    _git(root, "branch", "-M", "main")
    _git(root, "checkout", "-b", "feature-branch")
    (root / "file1.txt").write_text("modified content")
    (root / "dir2").mkdir()
    (root / "dir2" / "file3.txt").write_text("new file content")
    (root / "dir1" / "file2.txt").unlink()
    _git(root, "add", "--all")
    _git(root, "commit", "-m", "Update files")
    _git(root, "checkout", "main")
    _git(root, "checkout", "feature-branch")
    return root


@pytest.fixture
def output_dir(tmp_path):
    out = tmp_path / "out"
    out.mkdir()
    return out


def _assert_expected_statuses(changes):
    assert set(changes) == {"file1.txt", "dir1/file2.txt", "dir2/file3.txt"}
    assert changes["file1.txt"].status is FileStatus.MODIFIED
    assert changes["dir1/file2.txt"].status is FileStatus.DELETED
    assert changes["dir2/file3.txt"].status is FileStatus.ADDED


def test_export_branch_changes(repo, output_dir):
    processor = open_processor(str(repo))
    changes = processor.export_branch_changes("feature-branch", "main", output_dir)

    assert len(changes) == 3
    assert (output_dir / "file1.txt").read_text() == "modified content"
    assert (output_dir / "dir2" / "file3.txt").read_text() == "new file content"
    assert not (output_dir / "dir1" / "file2.txt").exists()

    diff_content = (output_dir / "file1.txt.diff").read_text()
    assert "-original content" in diff_content
    assert "+modified content" in diff_content

    assert not (output_dir / "dir2" / "file3.txt.diff").exists()
    assert not (output_dir / "dir1" / "file2.txt.diff").exists()
    _assert_expected_statuses(changes)


def test_list_only_mode_branch(repo, output_dir):
    processor = open_processor(str(repo))
    changes = processor.list_branch_changes("feature-branch", "main")

    assert len(changes) == 3
    assert not (repo / "file1.txt.diff").exists()
    assert not (output_dir / "file1.txt").exists()
    assert not (output_dir / "dir2" / "file3.txt").exists()
    _assert_expected_statuses(changes)


def test_export_commit_changes(repo, output_dir):
    commit_hash = _git(repo, "rev-parse", "feature-branch")
    processor = open_processor(str(repo))
    changes = processor.export_commit_changes(commit_hash, output_dir)

    assert (output_dir / "file1.txt").read_text() == "modified content"
    assert (output_dir / "dir2" / "file3.txt").read_text() == "new file content"
    assert not (output_dir / "dir1" / "file2.txt").exists()

    diff_content = (output_dir / "file1.txt.diff").read_text()
    assert "-original content" in diff_content
    assert "+modified content" in diff_content

    assert not (output_dir / "dir2" / "file3.txt.diff").exists()
    assert not (output_dir / "dir1" / "file2.txt.diff").exists()
    _assert_expected_statuses(changes)


def test_list_commit_changes(repo):
    commit_hash = _git(repo, "rev-parse", "feature-branch")
    with GitChangesProcessor.from_local(repo) as processor:
        changes = processor.list_commit_changes(commit_hash)
    _assert_expected_statuses(changes)
    assert changes["file1.txt"].path == "file1.txt"


def test_default_branch_in_clone(repo, tmp_path, output_dir):
    _git(repo, "checkout", "main")
    clone = tmp_path / "clone"
    _git(tmp_path, "clone", str(repo), str(clone))

    processor = GitChangesProcessor.from_local(clone)
    listed = processor.list_changes_from_default_branch("feature-branch")
    _assert_expected_statuses(listed)

    exported = processor.export_changes_from_default_branch("feature-branch", output_dir)
    _assert_expected_statuses(exported)
    assert (output_dir / "file1.txt").read_text() == "modified content"
    assert (output_dir / "file1.txt.diff").exists()


def test_default_branch_missing_raises(repo):
    processor = GitChangesProcessor.from_local(repo)
    with pytest.raises(GitCommandError):
        processor.list_changes_from_default_branch("feature-branch")


def test_checkout_of_unknown_branch_raises(repo):
    processor = GitChangesProcessor.from_local(repo)
    with pytest.raises(GitCommandError):
        processor.list_branch_changes("no-such-branch", "main")


def test_unknown_commit_without_origin_raises(repo):
    processor = GitChangesProcessor.from_local(repo)
    with pytest.raises(GitCommandError):
        processor.list_commit_changes("0123456789abcdef0123456789abcdef01234567")


def test_from_source_local_path_uses_path(repo):
    processor = GitChangesProcessor.from_source(str(repo))
    assert isinstance(processor.git, GitCli)
    assert processor.git.repo_path == Path(repo)


class _RecordingGit(Git):
    def __init__(self, diff_output, commit_known=True):
        self.diff_output = diff_output
        self.commit_known = commit_known
        self.calls = []
        self.files = []

    def clone_repo(self, url):
        self.calls.append(("clone", url))

    def get_file_content(self, ref_name, path):
        return None

    def run_git_command(self, args):
        self.calls.append(tuple(args))
        if args[0] == "cat-file" and not self.commit_known:
            raise GitCommandError("missing")
        if args[0] == "diff":
            return self.diff_output
        return ""

    def run_git_command_to_file(self, args, output_file_path):
        self.files.append((tuple(args), Path(output_file_path)))

    def checkout_branch(self, branch):
        self.calls.append(("checkout", branch))

    def discover_default_branch(self):
        return "origin/main"


def test_commit_export_issues_expected_commands(tmp_path):
    fake = _RecordingGit("M\tfile1.txt\nA\tnew.txt\nD\told.txt")
    processor = GitChangesProcessor(fake)
    changes = processor.export_commit_changes("abc123", tmp_path)

    assert fake.calls == [
        ("cat-file", "-e", "abc123"),
        ("diff", "--name-status", "--no-renames", "abc123^", "abc123"),
    ]
    assert fake.files == [
        (("show", "abc123:file1.txt"), tmp_path / "file1.txt"),
        (("diff", "abc123^..abc123", "--", "file1.txt"), tmp_path / "file1.txt.diff"),
        (("show", "abc123:new.txt"), tmp_path / "new.txt"),
    ]
    assert changes["old.txt"].status is FileStatus.DELETED


def test_missing_commit_is_fetched():
    fake = _RecordingGit("A\tx.txt", commit_known=False)
    changes = GitChangesProcessor(fake).list_commit_changes("abc123")
    assert ("fetch", "origin", "abc123") in fake.calls
    assert changes["x.txt"].status is FileStatus.ADDED


def test_default_branch_export_uses_discovered_range(tmp_path):
    fake = _RecordingGit("M\tf.txt")
    GitChangesProcessor(fake).export_changes_from_default_branch("feat", tmp_path)
    assert fake.calls == [
        ("checkout", "feat"),
        ("diff", "--name-status", "--no-renames", "origin/main...feat"),
    ]
    assert fake.files[1] == (
        ("diff", "origin/main...feat", "--", "f.txt"),
        tmp_path / "f.txt.diff",
    )