"""
Configuration data models.

This module contains the settings loaded from the optional TOML file and the
resolved per-invocation RunConfig.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

DEFAULT_BASE_URL = "https://hc-ping.com"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class NotifyConfig:
    """
    Settings for the ping endpoint, loaded from the `[notify]` table.
    """

    # Root of the ping API; the check id is appended to it.
    base_url: str = DEFAULT_BASE_URL
    # Per-request timeout in seconds.
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    # User-Agent header sent with every ping. None keeps the requests default.
    user_agent: Optional[str] = None


@dataclass(frozen=True)
class LoggingConfig:
    """Settings for local diagnostics, loaded from the `[logging]` table."""

    level: str = DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    notify: NotifyConfig = field(default_factory=NotifyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass(frozen=True)
class RunConfig:
    """
    Everything needed for one wrapped invocation.

    Built once from flags and environment, read-only afterwards.
    """

    check_id: str
    tee: bool = False
    ignore_exit_code: bool = False
    # None when no command was given on the command line.
    command: Optional[str] = None
    arguments: Tuple[str, ...] = ()
    # Environment for the child, with configuration-only variables removed.
    environment: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(
            self, "environment", MappingProxyType(dict(self.environment))
        )

    @property
    def argv(self) -> Tuple[str, ...]:
        """The full argument vector passed to the child."""
        if self.command is None:
            return ()
        return (self.command,) + self.arguments
