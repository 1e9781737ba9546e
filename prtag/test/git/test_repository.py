"""Tests for prtag.git.repository module."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from prtag.core.result import Err, Ok, Result
from prtag.git import repository as repository_mod
from prtag.git.repository import Repository
from prtag.platform.process import ProcessError
from prtag.platform.process import run as run_process


class _FakeGit:
    """Replaces run_process; answers by git subcommand."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []
        self.replies: dict[str, Result[str, ProcessError]] = {}

    def reply(self, subcommand: str, result: Result[str, ProcessError]) -> None:
        self.replies[subcommand] = result

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[str, ProcessError]:
        self.calls.append(cmd)
        self.timeouts.append(timeout)
        return self.replies.get(cmd[3], Ok(""))


def _failed(stderr: str, returncode: int = 128) -> Err[ProcessError]:
    return Err(ProcessError(command=("git",), returncode=returncode, stdout="", stderr=stderr))


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> _FakeGit:
    fake = _FakeGit()
    monkeypatch.setattr(repository_mod, "run_process", fake)
    return fake


class TestDescribeLatestTag:
    def test_returns_tag(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("describe", Ok("1.2.3\n"))
        assert Repository(tmp_path).describe_latest_tag() == Ok("1.2.3")
        assert fake_git.calls[0] == [
            "git",
            "-C",
            str(tmp_path),
            "describe",
            "--tags",
            "--abbrev=0",
            "--match",
            "[0-9]*.[0-9]*.[0-9]*",
            "--match",
            "v[0-9]*.[0-9]*.[0-9]*",
            "HEAD",
        ]

    def test_no_tags_is_none(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("describe", _failed("fatal: No names found, cannot describe anything."))
        assert Repository(tmp_path).describe_latest_tag() == Ok(None)

    def test_other_failure_is_error(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("describe", _failed("fatal: not a git repository"))
        result = Repository(tmp_path).describe_latest_tag()
        assert isinstance(result, Err)
        assert result.error.message == "fatal: not a git repository"
        assert result.error.returncode == 128


class TestHistoryWalk:
    def test_first_parent_commits_oldest_first(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("rev-list", Ok("aaa\nbbb\n\n"))
        result = Repository(tmp_path).first_parent_commits("1.2.3", "HEAD")
        assert result == Ok(["aaa", "bbb"])
        assert fake_git.calls[0][3:] == ["rev-list", "--first-parent", "--reverse", "1.2.3..HEAD"]

    def test_root_commits(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("rev-list", Ok("root\n"))
        assert Repository(tmp_path).root_commits() == Ok(["root"])
        assert fake_git.calls[0][3:] == ["rev-list", "--max-parents=0", "HEAD"]

    def test_head_sha_error(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("rev-parse", _failed("fatal: ambiguous argument 'HEAD'"))
        result = Repository(tmp_path).head_sha()
        assert isinstance(result, Err)
        assert result.error.command == "rev-parse HEAD"


class TestTags:
    def test_tag_exists_matches_exact_name(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("tag", Ok("1.3.0\n"))
        assert Repository(tmp_path).tag_exists("1.3.0") == Ok(True)

    def test_tag_missing(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("tag", Ok(""))
        assert Repository(tmp_path).tag_exists("1.3.0") == Ok(False)

    def test_push_uses_full_ref_and_network_timeout(
        self, tmp_path: Path, fake_git: _FakeGit
    ) -> None:
        assert Repository(tmp_path).push_tag("origin", "1.3.0") == Ok(None)
        assert fake_git.calls[0][3:] == ["push", "origin", "refs/tags/1.3.0"]
        assert fake_git.timeouts[0] == 180.0

    def test_push_rejected(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        fake_git.reply("push", _failed("! [rejected] 1.3.0 -> 1.3.0 (already exists)", 1))
        result = Repository(tmp_path).push_tag("origin", "1.3.0")
        assert isinstance(result, Err)
        assert "already exists" in result.error.message
        assert result.error.command == "push origin 1.3.0"

    def test_delete_tag(self, tmp_path: Path, fake_git: _FakeGit) -> None:
        assert Repository(tmp_path).delete_tag("1.3.0") == Ok(None)
        assert fake_git.calls[0][3:] == ["tag", "-d", "1.3.0"]


def _git(repo_dir: Path, *args: str) -> str:
    result = run_process(
        [
            "git",
            "-c",
            "user.name=Release Bot",
            "-c",
            "user.email=bot@example.test",
            "-c",
            "commit.gpgsign=false",
            *args,
        ],
        cwd=repo_dir,
    )
    assert isinstance(result, Ok), result
    return result.value.strip()


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_real_repository_walk(tmp_path: Path) -> None:
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "root")
    repo = Repository(tmp_path)

    assert repo.exists()
    assert repo.describe_latest_tag() == Ok(None)

    _git(tmp_path, "tag", "1.0.0")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "second")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "third")
    head = _git(tmp_path, "rev-parse", "HEAD")

    assert repo.describe_latest_tag() == Ok("1.0.0")
    walk = repo.first_parent_commits("1.0.0", "HEAD")
    assert isinstance(walk, Ok)
    assert len(walk.value) == 2
    assert walk.value[-1] == head

    assert repo.tag_exists("1.1.0") == Ok(False)
    assert repo.create_tag("1.1.0", head) == Ok(None)
    assert repo.tag_exists("1.1.0") == Ok(True)
    assert repo.delete_tag("1.1.0") == Ok(None)
    assert repo.tag_exists("1.1.0") == Ok(False)


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_real_describe_skips_non_version_tags(tmp_path: Path) -> None:
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "root")
    _git(tmp_path, "tag", "1.2.3")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "docs")
    _git(tmp_path, "tag", "docs-snapshot")
    repo = Repository(tmp_path)

    assert repo.describe_latest_tag() == Ok("1.2.3")


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_real_describe_ignores_only_non_version_tags(tmp_path: Path) -> None:
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "commit", "-q", "--allow-empty", "-m", "root")
    _git(tmp_path, "tag", "nightly")

    assert Repository(tmp_path).describe_latest_tag() == Ok(None)
