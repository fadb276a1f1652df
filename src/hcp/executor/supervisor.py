"""
Process supervisor for the wrapped command.

This module spawns the child with a controlled environment, drains its stdout
and stderr concurrently on two worker threads while the main thread waits for
the exit status, and joins both drainers into a RunOutcome.
"""

import logging
import subprocess
import sys
from concurrent.futures import Future, ThreadPoolExecutor
from typing import BinaryIO, Dict, Optional, Tuple

from ..models.config import RunConfig
from ..models.results import RunOutcome
from ..validation import CaptureError, SpawnError, WaitError
from .stream_drainer import DEFAULT_CHUNK_SIZE, StreamDrainer

logger = logging.getLogger(__name__)

DRAIN_THREAD_PREFIX = "StreamDrainer"


def _local_sink(stream) -> Optional[BinaryIO]:
    # sys.stdout may be replaced by a text-only object (e.g. under test runners).
    return getattr(stream, "buffer", None)


class ProcessSupervisor:
    """
    Runs one command to completion while capturing both output streams.

    Both pipes are drained at the same time as the wait: a child that fills
    one pipe while only the other is being read would block forever.
    """

    def __init__(
        self,
        stdout_sink: Optional[BinaryIO] = None,
        stderr_sink: Optional[BinaryIO] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        """
        Initialize the supervisor.

        Args:
            stdout_sink: Tee target for the child's stdout, defaults to our stdout
            stderr_sink: Tee target for the child's stderr, defaults to our stderr
            chunk_size: Read size used by the drainers
        """
        self.stdout_sink = stdout_sink
        self.stderr_sink = stderr_sink
        self.chunk_size = chunk_size

    def run(self, config: RunConfig) -> RunOutcome:
        """
        Run the configured command and capture its output.

        Args:
            config: Resolved run configuration; config.command must be set

        Returns:
            RunOutcome with the exit code (None if killed by a signal) and the
            captured stdout and stderr

        Raises:
            SpawnError: If the command could not be started
            WaitError: If the exit status could not be obtained
            CaptureError: If reading one of the pipes failed
        """
        if config.command is None:
            raise ValueError("RunConfig has no command to run")

        process = self._spawn(config)

        drainers = {
            "stdout": StreamDrainer(
                "stdout", process.stdout, self._sink_for("stdout", config.tee),
                self.chunk_size,
            ),
            "stderr": StreamDrainer(
                "stderr", process.stderr, self._sink_for("stderr", config.tee),
                self.chunk_size,
            ),
        }

        pool = ThreadPoolExecutor(
            max_workers=len(drainers), thread_name_prefix=DRAIN_THREAD_PREFIX
        )
        futures: Dict[str, Future] = {}
        try:
            for name, drainer in drainers.items():
                futures[name] = pool.submit(drainer.drain)

            try:
                returncode = process.wait()
            except OSError as e:
                raise WaitError(f"Failed waiting for process: {e}") from e
            logger.debug(f"Child {process.pid} exited with return code {returncode}")

            # Joined only after the wait: the child may still write while exiting.
            stdout, stderr = self._join_all(futures)
        finally:
            pool.shutdown(wait=False)
            self._close_pipes(process, futures)

        exit_code = returncode if returncode >= 0 else None
        if exit_code is None:
            logger.warning(f"Child {process.pid} was terminated by signal {-returncode}")

        return RunOutcome(exit_code=exit_code, stdout=stdout, stderr=stderr)

    def _spawn(self, config: RunConfig) -> subprocess.Popen:
        # Our own buffered output must not land after the child's.
        for stream in (sys.stdout, sys.stderr):
            try:
                stream.flush()
            except (OSError, ValueError) as e:
                logger.debug(f"Could not flush local output before spawn: {e}")

        try:
            process = subprocess.Popen(
                list(config.argv),
                stdin=None,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                env=dict(config.environment),
            )
        except (OSError, ValueError) as e:
            raise SpawnError(f"Failed to spawn process: {e}") from e

        logger.info(f"Started '{config.command}' with PID {process.pid}")
        return process

    def _sink_for(self, name: str, tee: bool) -> Optional[BinaryIO]:
        if not tee:
            return None
        if name == "stdout":
            return self.stdout_sink if self.stdout_sink is not None else _local_sink(sys.stdout)
        return self.stderr_sink if self.stderr_sink is not None else _local_sink(sys.stderr)

    @staticmethod
    def _join(future: Future, name: str) -> bytes:
        """
        Wait for a drainer and return its data.

        Read failures become CaptureError; anything else raised inside the
        drainer thread propagates unchanged.
        """
        try:
            return future.result()
        except OSError as e:
            raise CaptureError(name, e) from e

    @classmethod
    def _join_all(cls, futures: Dict[str, Future]) -> Tuple[bytes, bytes]:
        """
        Join both drainers, then raise the first read failure if any.

        A failed stream does not cut the other drainer short: it is still
        read to EOF, so no worker thread outlives the run and holds up
        interpreter exit after the report was sent.
        """
        results: Dict[str, bytes] = {}
        first_error: Optional[CaptureError] = None
        for name in ("stdout", "stderr"):
            try:
                results[name] = cls._join(futures[name], name)
            except CaptureError as e:
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error
        return results["stdout"], results["stderr"]

    @staticmethod
    def _close_pipes(process: subprocess.Popen, futures: Dict[str, Future]) -> None:
        for name, pipe in (("stdout", process.stdout), ("stderr", process.stderr)):
            future = futures.get(name)
            # Never close a pipe a drainer thread is still reading.
            if pipe is None or (future is not None and not future.done()):
                continue
            try:
                pipe.close()
            except OSError as e:
                logger.debug(f"Error closing child {name} pipe: {e}")


def run_command(config: RunConfig, **kwargs) -> RunOutcome:
    """Convenience wrapper: run config with a fresh ProcessSupervisor."""
    return ProcessSupervisor(**kwargs).run(config)
