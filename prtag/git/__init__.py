"""Local git access for the release pipeline.

Usage:
    from prtag.git import Repository

    repo = Repository(Path("/path/to/checkout"))
    head = repo.head_sha()
    if is_ok(head):
        print(f"HEAD: {head.value}")
"""

from prtag.git.repository import (
    GitError,
    Repository,
)

__all__ = [
    "GitError",
    "Repository",
]
