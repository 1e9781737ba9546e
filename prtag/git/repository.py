"""The release history store, backed by the local git checkout.

Reads the nearest tag, walks first-parent history and creates/pushes tags.
Each call runs one git command and returns a Result.

    match Repository(checkout).describe_latest_tag():
        case Ok(None):
            print("no release yet")
        case Ok(tag):
            print(f"latest: {tag}")
        case Err(failure):
            print(f"git {failure.command}: {failure.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from prtag.core.result import Err, Ok, Result
from prtag.platform.process import ProcessError
from prtag.platform.process import run as run_process

__all__ = ["GitError", "Repository"]

LOCAL_TIMEOUT_SECONDS = 30.0
REMOTE_TIMEOUT_SECONDS = 180.0
_REMOTE_SUBCOMMANDS = frozenset({"fetch", "pull", "push", "clone"})

# Globs passed to `git describe --match`: only version tags count as releases.
VERSION_TAG_GLOBS = ("[0-9]*.[0-9]*.[0-9]*", "v[0-9]*.[0-9]*.[0-9]*")

# `git describe` stderr when the history has no tag at all, or none reachable.
_NO_TAG_MARKERS = (
    "no names found",
    "no tags can describe",
    "cannot describe anything",
)


@dataclass(frozen=True, slots=True)
class GitError:
    """A git command that exited non-zero.

    `command` is a short label such as "push origin 1.3.0"; `message` is
    git's stderr.
    """

    command: str
    message: str
    returncode: int = 1


def _git_error(command: str, failure: ProcessError) -> GitError:
    message = failure.stderr.strip() or failure.stdout.strip() or f"git {command} failed"
    return GitError(command=command, message=message, returncode=failure.returncode)


def _lines(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if line.strip()]


class Repository:
    def __init__(self, path: Path) -> None:
        self.path = path

    def exists(self) -> bool:
        """True for a checkout root (`.git` directory, or file for worktrees)."""
        return (self.path / ".git").exists()

    def head_sha(self) -> Result[str, GitError]:
        out = self._git("rev-parse HEAD", "rev-parse", "HEAD")
        return Ok(out.value.strip()) if isinstance(out, Ok) else out

    def describe_latest_tag(self, rev: str = "HEAD") -> Result[str | None, GitError]:
        """Nearest version tag reachable from `rev`.

        Tags not shaped like `X.Y.Z` or `vX.Y.Z` are skipped. Ok(None) when no
        such tag is reachable.
        """
        match_args = [arg for glob in VERSION_TAG_GLOBS for arg in ("--match", glob)]
        out = self._exec(["describe", "--tags", "--abbrev=0", *match_args, rev])
        if isinstance(out, Ok):
            return Ok(out.value.strip() or None)

        stderr = out.error.stderr.lower()
        if any(marker in stderr for marker in _NO_TAG_MARKERS):
            return Ok(None)
        return Err(_git_error("describe --tags", out.error))

    def root_commits(self, rev: str = "HEAD") -> Result[list[str], GitError]:
        out = self._git("rev-list --max-parents=0", "rev-list", "--max-parents=0", rev)
        return Ok(_lines(out.value)) if isinstance(out, Ok) else out

    def first_parent_commits(self, start: str, end: str) -> Result[list[str], GitError]:
        """Commits in `start..end` along first parents, oldest first."""
        out = self._git(
            "rev-list --first-parent", "rev-list", "--first-parent", "--reverse", f"{start}..{end}"
        )
        return Ok(_lines(out.value)) if isinstance(out, Ok) else out

    def tag_exists(self, name: str) -> Result[bool, GitError]:
        """Local tag namespace only; the remote is not queried."""
        out = self._git("tag --list", "tag", "--list", name)
        return Ok(name in _lines(out.value)) if isinstance(out, Ok) else out

    def create_tag(self, name: str, commit: str) -> Result[None, GitError]:
        """Lightweight tag `name` at `commit`."""
        out = self._git(f"tag {name}", "tag", name, commit)
        return Ok(None) if isinstance(out, Ok) else out

    def push_tag(self, remote: str, name: str) -> Result[None, GitError]:
        """Push one tag ref; the remote rejects a name it already has."""
        out = self._git(f"push {remote} {name}", "push", remote, f"refs/tags/{name}")
        return Ok(None) if isinstance(out, Ok) else out

    def delete_tag(self, name: str) -> Result[None, GitError]:
        out = self._git(f"tag -d {name}", "tag", "-d", name)
        return Ok(None) if isinstance(out, Ok) else out

    def _git(self, label: str, *args: str) -> Result[str, GitError]:
        out = self._exec(list(args))
        if isinstance(out, Err):
            return Err(_git_error(label, out.error))
        return out

    def _exec(self, args: list[str]) -> Result[str, ProcessError]:
        remote = bool(args) and args[0] in _REMOTE_SUBCOMMANDS
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            timeout=REMOTE_TIMEOUT_SECONDS if remote else LOCAL_TIMEOUT_SECONDS,
        )
