"""Error codes for CLI exit status.

These map release failures to shell exit codes so the invoking CI job can
tell a missing label apart from an unreachable API.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success (including "nothing to release" and "already released")
    - 1: User error (bad input, missing release label, invalid config)
    - 2: Environment error (gh missing or not authenticated)
    - 4: Network error (GitHub API or push failed)
    - 5: I/O error (local git command failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
