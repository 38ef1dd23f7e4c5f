"""Process exit codes for the ``smc`` command.

Values are part of the CLI contract and must stay stable:
- 0: Success
- 1: User error (bad option, unreadable or invalid config)
- 2: Sequence failed (a step rejected the running promise)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    SEQUENCE_FAILED = 2

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
