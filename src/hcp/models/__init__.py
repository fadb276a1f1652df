"""
Data models for the wrapper.

Configuration Models:
- Ping endpoint and logging settings from the TOML file
- The resolved per-invocation RunConfig

Result Models:
- RunOutcome produced by the process supervisor
- FinishResult produced by the notification protocol
"""

from .config import AppConfig, LoggingConfig, NotifyConfig, RunConfig
from .results import (
    ABNORMAL_EXIT_CODE,
    CAPTURE_ERROR_EXIT_CODE,
    FinishResult,
    RunOutcome,
)

__all__ = [
    # Configuration
    "AppConfig",
    "LoggingConfig",
    "NotifyConfig",
    "RunConfig",
    # Results
    "ABNORMAL_EXIT_CODE",
    "CAPTURE_ERROR_EXIT_CODE",
    "FinishResult",
    "RunOutcome",
]
