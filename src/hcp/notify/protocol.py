"""
Notification protocol: start ping, supervised run, final ping.

The protocol is a three-state sequence per invocation. It never exits the
process itself; it returns a FinishResult and the CLI performs the exit.
"""

import logging
from enum import Enum
from typing import Optional

from ..executor.supervisor import ProcessSupervisor
from ..models.config import RunConfig
from ..models.results import (
    ABNORMAL_EXIT_CODE,
    CAPTURE_ERROR_EXIT_CODE,
    FinishResult,
    RunOutcome,
)
from ..validation import (
    CaptureError,
    ErrorSeverity,
    NotificationError,
    SupervisorError,
    handle_error,
)
from .client import HealthCheckClient
from .report import NO_COMMAND_MESSAGE, build_report_body

logger = logging.getLogger(__name__)


class ProtocolState(Enum):
    NOT_STARTED = "not_started"
    STARTED = "started"
    FINISHED = "finished"


class NotificationProtocol:
    """
    Drives one wrapped invocation from start ping to final report.

    Whether a run is reported as success or failure depends only on what the
    child did. The ignore-exit-code option changes the wrapper's own exit
    status, never the endpoint that is pinged.
    """

    def __init__(
        self,
        client: HealthCheckClient,
        supervisor: Optional[ProcessSupervisor] = None,
    ):
        self.client = client
        self.supervisor = supervisor or ProcessSupervisor()
        self.state = ProtocolState.NOT_STARTED

    def start(self) -> bool:
        """
        Send the start ping.

        A failed ping is logged and otherwise ignored.

        Returns:
            True if the ping was delivered
        """
        if self.state is not ProtocolState.NOT_STARTED:
            raise RuntimeError(f"Cannot start from state {self.state.value}")
        self.state = ProtocolState.STARTED

        try:
            self.client.start()
        except NotificationError as e:
            handle_error(
                error=e,
                context="healthchecks /start call",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            return False
        return True

    def finish(self, outcome: RunOutcome, ignore_exit_code: bool = False) -> FinishResult:
        """
        Report a completed run.

        Args:
            outcome: What the supervisor observed
            ignore_exit_code: Exit 0 locally whatever the child returned

        Returns:
            The final decision; the body always states the real exit code
        """
        body = build_report_body(outcome)
        code = outcome.exit_code if outcome.exit_code is not None else ABNORMAL_EXIT_CODE
        return self.report(body, code, ignore_exit_code=ignore_exit_code)

    def report(
        self,
        body: str,
        exit_code: int,
        ignore_exit_code: bool = False,
        log: bool = False,
    ) -> FinishResult:
        """
        Send the final ping and decide the wrapper's exit status.

        Args:
            body: Report text
            exit_code: Outcome code; 0 selects the success endpoint
            ignore_exit_code: Force the returned exit code to 0
            log: Also write body to local diagnostics

        Returns:
            FinishResult; if the ping was lost its exit code is ABNORMAL_EXIT_CODE
        """
        if self.state is ProtocolState.FINISHED:
            raise RuntimeError("Run has already been reported")
        self.state = ProtocolState.FINISHED

        if log:
            logger.warning(body)

        success = exit_code == 0
        final_code = 0 if ignore_exit_code else exit_code

        try:
            self.client.finish(body, success=success)
        except NotificationError as e:
            handle_error(
                error=e,
                context="sending finishing request to healthchecks",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            return FinishResult(
                body=body,
                exit_code=ABNORMAL_EXIT_CODE,
                success=success,
                delivered=False,
            )

        logger.info(
            f"Reported {'success' if success else 'failure'}, exiting with {final_code}"
        )
        return FinishResult(body=body, exit_code=final_code, success=success)

    def execute(self, config: RunConfig) -> FinishResult:
        """
        Run the whole sequence for config.

        Without a command the run is reported as an immediate success and
        nothing is spawned.
        """
        if config.command is None:
            return self.report(NO_COMMAND_MESSAGE, 0, log=True)

        self.start()

        try:
            outcome = self.supervisor.run(config)
        except CaptureError as e:
            return self.report(str(e), CAPTURE_ERROR_EXIT_CODE)
        except SupervisorError as e:
            return self.report(str(e), ABNORMAL_EXIT_CODE, log=True)

        return self.finish(outcome, ignore_exit_code=config.ignore_exit_code)
