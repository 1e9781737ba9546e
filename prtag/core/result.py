"""Ok/Err values returned by every release stage and adapter.

A stage that fails returns Err(ReleaseError) and the caller returns it
unchanged, so a run stops at its first failure without exceptions:

    latest = read_latest_tag(history)
    if isinstance(latest, Err):
        return latest

Where both outcomes matter, match on them:

    match repo.describe_latest_tag():
        case Ok(None):
            ...  # nothing released yet
        case Ok(tag):
            ...
        case Err(failure):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Never, TypeGuard

__all__ = ["Err", "Ok", "Result", "is_err", "is_ok"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def unwrap(self) -> T:
        return self.value

    def unwrap_or[D](self, default: D) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def unwrap(self) -> Never:
        """Raise ValueError; an Err carries no value."""
        raise ValueError(f"unwrap called on Err: {self.error}")

    def unwrap_or[D](self, default: D) -> D:
        return default


type Result[T, E] = Ok[T] | Err[E]


def is_ok[T, E](result: Result[T, E]) -> TypeGuard[Ok[T]]:
    return isinstance(result, Ok)


def is_err[T, E](result: Result[T, E]) -> TypeGuard[Err[E]]:
    return isinstance(result, Err)
