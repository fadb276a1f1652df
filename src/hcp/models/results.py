"""
Result data models.

This module contains the outcome of a supervised run and the final decision
produced by the notification protocol.
"""

from dataclasses import dataclass
from typing import Optional

# Exit status used when the child ended without a conventional code, could not
# be spawned or waited on, or when the final ping was lost.
ABNORMAL_EXIT_CODE = 963

# Exit status used when the child's output could not be read.
CAPTURE_ERROR_EXIT_CODE = 693


@dataclass(frozen=True)
class RunOutcome:
    """
    What the process supervisor observed for one child process.
    """

    # Child exit code, or None if it terminated without one (e.g. by a signal).
    exit_code: Optional[int]
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def has_exit_code(self) -> bool:
        return self.exit_code is not None


@dataclass(frozen=True)
class FinishResult:
    """
    The terminal decision of a run: what was reported and how to exit.
    """

    body: str
    # Exit status for the wrapper process itself.
    exit_code: int
    # True if the success endpoint was used, False for the failure endpoint.
    success: bool
    # False if the final ping could not be delivered.
    delivered: bool = True
