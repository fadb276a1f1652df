"""
Command execution for the hcp package.

This module runs the wrapped command and captures its output with two
concurrent stream drainers.
"""

from .stream_drainer import DEFAULT_CHUNK_SIZE, StreamDrainer, drain
from .supervisor import ProcessSupervisor, run_command

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ProcessSupervisor",
    "StreamDrainer",
    "drain",
    "run_command",
]
