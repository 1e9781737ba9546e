from __future__ import annotations

from collections.abc import Callable

import pytest

from prtag.services.release.memory import MemoryHistory, MemoryPullRequests, MemoryReleases
from prtag.services.release.model import PullRequestRef


def _make_pr(number: int, *labels: str, title: str | None = None) -> PullRequestRef:
    return PullRequestRef(
        number=number,
        title=title or f"Change {number}",
        author=f"dev{number}",
        url=f"https://github.com/acme/widgets/pull/{number}",
        labels=frozenset(labels),
    )


@pytest.fixture
def make_pr() -> Callable[..., PullRequestRef]:
    return _make_pr


@pytest.fixture
def history() -> MemoryHistory:
    return MemoryHistory()


@pytest.fixture
def pull_requests() -> MemoryPullRequests:
    return MemoryPullRequests()


@pytest.fixture
def releases() -> MemoryReleases:
    return MemoryReleases()
