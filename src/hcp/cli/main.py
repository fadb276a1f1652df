"""
Command-line interface for hcp.

This module parses the wrapper's own flags, loads configuration, validates the
health check id and hands the wrapped command to the notification protocol.
The process exits here, and only here, with the code the protocol decided.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Tuple

from .. import __version__
from ..config import get_config, resolve_run_config, set_config_path
from ..notify import HealthCheckClient, NotificationProtocol
from ..validation import ValidationError, handle_cli_error

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)

# Wrapper flags; scanning stops at the first token that is not one of these.
VALUE_FLAGS = ("--hcp-id", "--hcp-config")
SWITCH_FLAGS = ("--hcp-tee", "--hcp-ignore-code", "--hcp-version", "-h", "--help")

USAGE = "hcp [--hcp-id HCP_ID] [--hcp-tee] [--hcp-ignore-code] [--hcp-config PATH] [cmd [args...]]"

EPILOG = """\
environment:
  HCP_ID           health check id, used when --hcp-id is not given
  HCP_TEE          enables --hcp-tee; only the existence of the variable is checked
  HCP_IGNORE_CODE  enables --hcp-ignore-code; only the existence is checked
  HCP_CONFIG       configuration file, used when --hcp-config is not given

If no command is passed, the health check is notified as a success with the
text 'No command given'. These variables are not passed on to cmd.
"""


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for the wrapper's own flags."""
    parser = argparse.ArgumentParser(
        prog="hcp",
        usage=USAGE,
        description=(
            "Run a command and report its outcome, with its output, "
            "to a health check ping endpoint."
        ),
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "--hcp-id",
        metavar="HCP_ID",
        help="Sets the health check id. Can also be set with HCP_ID.",
    )
    parser.add_argument(
        "--hcp-tee",
        action="store_true",
        help=(
            "Also copy the command's stdout/stderr to the local stdout/stderr. "
            "By default the output is only sent to the health check."
        ),
    )
    parser.add_argument(
        "--hcp-ignore-code",
        action="store_true",
        help=(
            "Exit 0 whatever the command returned. The health check is still "
            "notified of a failure."
        ),
    )
    parser.add_argument(
        "--hcp-config",
        metavar="PATH",
        type=Path,
        help="TOML configuration file (default: ~/.config/hcp/config.toml).",
    )
    parser.add_argument(
        "--hcp-version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def split_arguments(argv: Sequence[str]) -> Tuple[List[str], List[str]]:
    """
    Split argv into wrapper flags and the command line to run.

    The first token that is not a wrapper flag is the command; it and every
    token after it are returned untouched.

    Returns:
        Tuple of (wrapper_flags, command_line)
    """
    tokens = list(argv)
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token in VALUE_FLAGS:
            index += 2
        elif token in SWITCH_FLAGS or token.split("=", 1)[0] in VALUE_FLAGS:
            index += 1
        else:
            break
    index = min(index, len(tokens))
    return tokens[:index], tokens[index:]


def parse_arguments(argv: Sequence[str]) -> argparse.Namespace:
    """
    Parse the wrapper flags and attach the command line.

    The returned namespace has `command` (None when absent) and `arguments`.
    """
    wrapper_args, command_line = split_arguments(argv)
    args = build_parser().parse_args(wrapper_args)
    args.command = command_line[0] if command_line else None
    args.arguments = command_line[1:]
    return args


def setup_logging(level: str = "WARNING") -> None:
    """Configure diagnostics on stderr; stdout belongs to the wrapped command."""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )
    logging.getLogger().setLevel(level)


def run_cli(
    argv: Optional[Sequence[str]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """
    Run the wrapper and return the exit code it decided on.

    Configuration errors exit the process directly with code 1 before any
    notification is sent.
    """
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    setup_logging()
    args = parse_arguments(argv)

    try:
        if args.hcp_config is not None:
            set_config_path(args.hcp_config)
        app_config = get_config(environ)
    except (OSError, ValueError, ValidationError) as e:
        # tomllib.TOMLDecodeError is a ValueError.
        handle_cli_error(error=e, context="configuration loading", exit_code=1, logger=logger)
    logging.getLogger().setLevel(app_config.logging.level)

    try:
        run_config = resolve_run_config(
            check_id=args.hcp_id,
            tee=args.hcp_tee,
            ignore_exit_code=args.hcp_ignore_code,
            command=args.command,
            arguments=args.arguments,
            environ=environ,
        )
    except ValidationError as e:
        if e.value is None:
            build_parser().print_help(sys.stderr)
        handle_cli_error(error=e, context="health check id validation", exit_code=1, logger=logger)

    with HealthCheckClient(run_config.check_id, app_config.notify) as client:
        result = NotificationProtocol(client).execute(run_config)
    return result.exit_code


def main_cli() -> None:
    """Console script entry point."""
    sys.exit(run_cli())


if __name__ == "__main__":
    main_cli()
