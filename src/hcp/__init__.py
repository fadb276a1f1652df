"""
hcp: run a command and report its outcome to a health check ping endpoint.

The wrapper pings the endpoint when the command starts, captures the command's
stdout and stderr (optionally echoing them locally), and reports success or
failure with the captured output when it ends.

The package is organized into specialized modules:
- config: Configuration file loading and RunConfig resolution
- models: Data structures and type definitions
- validation: Input validation and error handling
- system: Environment handling for the child process
- executor: Stream draining and process supervision
- notify: Report formatting, ping client and notification protocol
- cli: Command-line interface

Usage:
    From command line:
        hcp --hcp-id <uuid> [--hcp-tee] [--hcp-ignore-code] cmd [args...]

    Programmatically:
        from hcp import HealthCheckClient, NotificationProtocol, resolve_run_config
        run_config = resolve_run_config(check_id=..., command="backup.sh")
        with HealthCheckClient(run_config.check_id) as client:
            result = NotificationProtocol(client).execute(run_config)
"""

__version__ = "1.0.0"

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path, resolve_run_config
from .executor import ProcessSupervisor, StreamDrainer, drain
from .notify import HealthCheckClient, NotificationProtocol, build_report_body
from .cli import main_cli

# Model classes for external use
from .models import (
    ABNORMAL_EXIT_CODE,
    CAPTURE_ERROR_EXIT_CODE,
    AppConfig,
    FinishResult,
    NotifyConfig,
    RunConfig,
    RunOutcome,
)

# Validation utilities
from .validation import (
    CaptureError,
    NotificationError,
    SpawnError,
    ValidationError,
    WaitError,
    is_valid_check_id,
)

# System utilities
from .system import filter_environment

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "resolve_run_config",
    "ProcessSupervisor",
    "StreamDrainer",
    "drain",
    "HealthCheckClient",
    "NotificationProtocol",
    "build_report_body",
    "main_cli",
    # Models
    "ABNORMAL_EXIT_CODE",
    "CAPTURE_ERROR_EXIT_CODE",
    "AppConfig",
    "FinishResult",
    "NotifyConfig",
    "RunConfig",
    "RunOutcome",
    # Validation
    "CaptureError",
    "NotificationError",
    "SpawnError",
    "ValidationError",
    "WaitError",
    "is_valid_check_id",
    # System utilities
    "filter_environment",
]
