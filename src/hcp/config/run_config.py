"""
Resolution of the per-invocation RunConfig.

Flags from the command line take precedence over the HCP_* environment
variables; the result is validated once and never changes afterwards.
"""

import logging
import os
from typing import Mapping, Optional, Sequence

from ..models.config import RunConfig
from ..system.environment import (
    CHECK_ID_ENV_VAR,
    IGNORE_CODE_ENV_VAR,
    TEE_ENV_VAR,
    env_flag_enabled,
    filter_environment,
)
from ..validation import validate_check_id

logger = logging.getLogger(__name__)


def resolve_run_config(
    check_id: Optional[str] = None,
    tee: bool = False,
    ignore_exit_code: bool = False,
    command: Optional[str] = None,
    arguments: Sequence[str] = (),
    environ: Optional[Mapping[str, str]] = None,
) -> RunConfig:
    """
    Merge command-line values with the environment into a RunConfig.

    Args:
        check_id: Value of --hcp-id, or None if the flag was absent
        tee: True if --hcp-tee was given
        ignore_exit_code: True if --hcp-ignore-code was given
        command: Command to run, None when no command was given
        arguments: Arguments for the command
        environ: Parent environment, defaults to os.environ

    Returns:
        Validated RunConfig

    Raises:
        ValidationError: If the check id is missing or malformed
    """
    env = os.environ if environ is None else environ

    if check_id is None:
        check_id = env.get(CHECK_ID_ENV_VAR)
    check_id = validate_check_id(check_id, field_name="--hcp-id")

    tee = tee or env_flag_enabled(TEE_ENV_VAR, env)
    ignore_exit_code = ignore_exit_code or env_flag_enabled(IGNORE_CODE_ENV_VAR, env)

    run_config = RunConfig(
        check_id=check_id,
        tee=tee,
        ignore_exit_code=ignore_exit_code,
        command=command,
        arguments=tuple(arguments),
        environment=filter_environment(env),
    )
    logger.debug(
        f"Resolved run: command={command!r}, {len(run_config.arguments)} args, "
        f"tee={tee}, ignore_exit_code={ignore_exit_code}"
    )
    return run_config
