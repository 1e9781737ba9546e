from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Literal


TriggerKind = Literal["push", "manual"]


@dataclass(frozen=True, slots=True)
class PullRequestRef:
    """A merged pull request as reported by the hosting platform."""

    number: int
    title: str
    author: str  # login, without "@"
    url: str
    labels: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Pull requests in scope for one release.

    Unique by number, in resolution order. Build it with `from_refs` so
    duplicates collapse to their first occurrence.
    """

    pull_requests: tuple[PullRequestRef, ...] = ()

    @classmethod
    def from_refs(cls, refs: Iterable[PullRequestRef]) -> ChangeSet:
        seen: set[int] = set()
        unique: list[PullRequestRef] = []
        for pr in refs:
            if pr.number in seen:
                continue
            seen.add(pr.number)
            unique.append(pr)
        return cls(pull_requests=tuple(unique))

    @property
    def numbers(self) -> tuple[int, ...]:
        return tuple(pr.number for pr in self.pull_requests)

    @property
    def is_empty(self) -> bool:
        return not self.pull_requests

    def __len__(self) -> int:
        return len(self.pull_requests)

    def __iter__(self) -> Iterator[PullRequestRef]:
        return iter(self.pull_requests)


@dataclass(frozen=True, slots=True)
class PublishedRelease:
    tag: str
    title: str
    url: str | None
