"""
Environment handling for the wrapped command.

The child receives the parent's environment minus the variables that only
configure the wrapper itself.
"""

import logging
import os
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

CHECK_ID_ENV_VAR = "HCP_ID"
TEE_ENV_VAR = "HCP_TEE"
IGNORE_CODE_ENV_VAR = "HCP_IGNORE_CODE"
CONFIG_ENV_VAR = "HCP_CONFIG"

CONFIG_ENV_VARS: FrozenSet[str] = frozenset(
    {CHECK_ID_ENV_VAR, TEE_ENV_VAR, IGNORE_CODE_ENV_VAR, CONFIG_ENV_VAR}
)


def filter_environment(
    environ: Optional[Mapping[str, str]] = None,
    excluded: Iterable[str] = CONFIG_ENV_VARS,
) -> Dict[str, str]:
    """Return a copy of environ without the excluded variable names.

    Args:
        environ: Source environment, defaults to os.environ.
        excluded: Variable names to drop.

    Returns:
        A new dict suitable for passing as a child's environment.
    """
    source = os.environ if environ is None else environ
    excluded_names = frozenset(excluded)
    filtered = {k: v for k, v in source.items() if k not in excluded_names}
    dropped = len(source) - len(filtered)
    if dropped:
        logger.debug(f"Removed {dropped} wrapper variables from child environment")
    return filtered


def env_flag_enabled(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """Presence-only flag check: any value, even an empty one, enables it."""
    source = os.environ if environ is None else environ
    return name in source
