"""
Configuration management and singleton pattern.

This module provides the main configuration loading interface, implementing a
singleton so the config file is read at most once per invocation.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional

from ..models.config import AppConfig
from ..validation import handle_config_error, ErrorSeverity
from .loader import load_main_config, resolve_config_path
from .validators import validate_app_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[AppConfig] = None

# None means "resolve the default path lazily"; the CLI sets this when
# --hcp-config is given.
_CONFIG_FILE_PATH: Optional[Path] = None


def set_config_path(config_path: Optional[Path]) -> None:
    """
    Set a custom configuration file path.

    An explicitly set path must exist; the default path is optional.

    Args:
        config_path: Path to the config file, or None to restore the default
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path) if config_path is not None else None
    # Clear cached config to force reload with new path
    _CONFIG = None
    logger.debug(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path, required: bool) -> AppConfig:
    """
    Load and validate the configuration file.

    Raises:
        FileNotFoundError: If a required configuration file is missing
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    try:
        config_data = load_main_config(config_path, required=required)
        app_config = validate_app_config(config_data)
        logger.debug(
            f"Loaded configuration: ping endpoint {app_config.notify.base_url}, "
            f"log level {app_config.logging.level}"
        )
        return app_config
    except FileNotFoundError as e:
        handle_config_error(
            error=e,
            context="loading configuration file",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise


def get_config(environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Get the application configuration, loading it if necessary.

    Args:
        environ: Environment used to find the config file, defaults to os.environ

    Returns:
        The singleton AppConfig instance
    """
    global _CONFIG
    if _CONFIG is None:
        if _CONFIG_FILE_PATH is not None:
            _CONFIG = _load_config(_CONFIG_FILE_PATH, required=True)
        else:
            config_path, required = resolve_config_path(environ)
            _CONFIG = _load_config(config_path, required=required)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None
