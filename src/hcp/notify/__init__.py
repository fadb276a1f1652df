"""
Health check notification: report formatting, ping client and protocol.
"""

from .client import HealthCheckClient
from .protocol import NotificationProtocol, ProtocolState
from .report import NO_COMMAND_MESSAGE, build_report_body, render_output

__all__ = [
    "HealthCheckClient",
    "NO_COMMAND_MESSAGE",
    "NotificationProtocol",
    "ProtocolState",
    "build_report_body",
    "render_output",
]
