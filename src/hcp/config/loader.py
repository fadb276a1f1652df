"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the TOML config file.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from ..system.environment import CONFIG_ENV_VAR
from ..validation import handle_config_error, ErrorSeverity

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = CONFIG_ENV_VAR


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.debug(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def load_main_config(config_path: Path, required: bool = True) -> Dict[str, Any]:
    """
    Load the main configuration file.

    Args:
        config_path: Path to the config file
        required: If False, a missing file yields an empty configuration

    Returns:
        Parsed configuration data
    """
    if not required and not config_path.exists():
        logger.debug(f"No configuration file at {config_path}, using defaults")
        return {}
    return load_toml_file(config_path, "main configuration file")


def resolve_config_path(
    environ: Optional[Mapping[str, str]] = None
) -> Tuple[Path, bool]:
    """
    Resolve the config path when none was given on the command line.

    `HCP_CONFIG` wins and must exist; otherwise the optional
    `$XDG_CONFIG_HOME/hcp/config.toml`, falling back to
    `~/.config/hcp/config.toml`.

    Returns:
        Tuple of (path, required)
    """
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_PATH_ENV_VAR)
    if explicit:
        return Path(explicit).expanduser(), True
    config_home = env.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / "hcp" / "config.toml", False
