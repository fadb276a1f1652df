"""
Command-line interface for the hcp package.
"""

from .main import main_cli, parse_arguments, run_cli, split_arguments

__all__ = [
    "main_cli",
    "parse_arguments",
    "run_cli",
    "split_arguments",
]
