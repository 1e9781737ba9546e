"""Pull-request label classification.

Each recognized label maps to a bump category; a pull request counts with
its most severe recognized label and the release takes the most severe
category across all its pull requests.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import IntEnum
from typing import TYPE_CHECKING

from prtag.core.config import LabelsConfig
from prtag.core.result import Err, Ok, Result
from prtag.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from prtag.services.release.model import ChangeSet, PullRequestRef


class BumpCategory(IntEnum):
    """Release impact, ordered by severity."""

    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()


type LabelTable = Mapping[str, BumpCategory]


def label_table(labels: LabelsConfig) -> dict[str, BumpCategory]:
    table: dict[str, BumpCategory] = {}
    for names, category in (
        (labels.patch, BumpCategory.PATCH),
        (labels.minor, BumpCategory.MINOR),
        (labels.major, BumpCategory.MAJOR),
    ):
        for name in names:
            table[name] = category
    return table


DEFAULT_LABEL_TABLE: LabelTable = label_table(LabelsConfig())


def classify_pull_request(
    pr: PullRequestRef, table: LabelTable = DEFAULT_LABEL_TABLE
) -> BumpCategory | None:
    """Most severe recognized label on one pull request, or None."""
    found = [table[label] for label in pr.labels if label in table]
    return max(found) if found else None


def classify_change_set(
    change_set: ChangeSet, table: LabelTable = DEFAULT_LABEL_TABLE
) -> Result[BumpCategory, ReleaseError]:
    """Most severe category across the change set.

    Fails when no pull request carries a recognized label: a default bump
    is never guessed.
    """
    if change_set.is_empty:
        return Err(
            ReleaseError(
                kind="no_release_label",
                message="No pull requests to classify",
                hint="The change set is empty; nothing can be released.",
            )
        )

    best: BumpCategory | None = None
    for pr in change_set:
        category = classify_pull_request(pr, table)
        if category is None:
            continue
        if best is None or category > best:
            best = category

    if best is None:
        known = ", ".join(sorted(table, key=lambda name: (-table[name], name)))
        numbers = ", ".join(f"#{n}" for n in change_set.numbers)
        return Err(
            ReleaseError(
                kind="no_release_label",
                message=f"No release label found on any of the PRs: {numbers}",
                hint=f"Label at least one PR with: {known}",
            )
        )

    return Ok(best)
