"""
Report body formatting.

The body sent with the final ping is plain text: a summary line followed by the
captured stdout and stderr, each in its own labeled section.
"""

from typing import List

from ..models.results import RunOutcome

NO_COMMAND_MESSAGE = "No command given"


def render_output(data: bytes) -> str:
    """Decode captured bytes as UTF-8, replacing invalid sequences with U+FFFD."""
    return data.decode("utf-8", errors="replace")


def summary_line(outcome: RunOutcome) -> str:
    if outcome.exit_code is None:
        return "Command exited without an exit code"
    return f"Command exited with exit code {outcome.exit_code}"


def build_report_body(outcome: RunOutcome) -> str:
    """
    Format a RunOutcome as the report body.

    Empty streams are omitted; a blank line separates the stdout and stderr
    sections only when both are present.

    Args:
        outcome: The supervised run's result

    Returns:
        The report text
    """
    lines: List[str] = [summary_line(outcome)]
    if outcome.stdout:
        lines.append("stdout:")
        lines.append(render_output(outcome.stdout))
    if outcome.stderr:
        if outcome.stdout:
            lines.append("")
        lines.append("stderr:")
        lines.append(render_output(outcome.stderr))
    return "\n".join(lines) + "\n"
