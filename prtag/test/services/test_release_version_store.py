from __future__ import annotations

from prtag.core.result import Err, Ok
from prtag.services.release.memory import MemoryHistory
from prtag.services.release.semver import SemVer
from prtag.services.release.version_store import LatestTag, baseline_version, read_latest_tag


def test_no_tag_means_no_baseline(history: MemoryHistory) -> None:
    assert read_latest_tag(history) == Ok(None)
    assert baseline_version(None) == SemVer(0, 0, 0)


def test_reads_nearest_tag(history: MemoryHistory) -> None:
    history.nearest_tag = "1.2.3"
    result = read_latest_tag(history)
    assert result == Ok(LatestTag(name="1.2.3", version=SemVer(1, 2, 3)))
    assert isinstance(result, Ok)
    assert baseline_version(result.value) == SemVer(1, 2, 3)


def test_prefixed_tag_keeps_its_name(history: MemoryHistory) -> None:
    history.nearest_tag = "v0.4.1"
    result = read_latest_tag(history)
    assert isinstance(result, Ok)
    assert result.value is not None
    assert result.value.name == "v0.4.1"
    assert result.value.version == SemVer(0, 4, 1)


def test_non_version_tag_is_rejected(history: MemoryHistory) -> None:
    history.nearest_tag = "nightly"
    result = read_latest_tag(history)
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_tag"
    assert "nightly" in result.error.message


def test_git_failure_is_wrapped(history: MemoryHistory) -> None:
    history.describe_error = "fatal: bad revision"
    result = read_latest_tag(history)
    assert isinstance(result, Err)
    assert result.error.kind == "git_failed"
    assert result.error.hint == "git describe --tags: fatal: bad revision"
