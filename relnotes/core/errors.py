"""Error codes for CLI exit status.

Every failure of a release-notes run terminates the process with one of
these codes; nothing is printed on stdout in that case.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (unknown file name, unknown category, malformed note)
    - 2: Environment error (gh missing, invalid config file)
    - 4: Network error (gh query failed, project not found)
    - 5: I/O error (file not found, permission denied)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
