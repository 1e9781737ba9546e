from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "gh_missing",
    "gh_auth_required",
    "gh_failed",
    "git_failed",
    "invalid_input",
    "invalid_tag",
    "no_release_label",
    "tag_push_failed",
    "release_failed",
    "config_invalid",
    "io_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error payload.

    The same shape is returned by every pipeline stage and by the git/gh
    adapters, so the CLI can render and map it to an exit code without
    knowing which stage failed.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
