"""
Draining of a child's output pipe with optional line-buffered tee.

A drainer reads one byte stream to end-of-stream and keeps everything it read.
When a sink is attached, data is forwarded eagerly but only up to the last line
terminator seen so far, so that stdout and stderr teed from two threads do not
split lines into each other.
"""

import logging
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 16 * 1024


def _last_terminator(data: bytearray, start: int) -> int:
    """Index of the last b"\\n" or b"\\r" at or after start, or -1."""
    return max(data.rfind(b"\n", start), data.rfind(b"\r", start))


def _write_to_sink(sink: BinaryIO, data: bytes) -> None:
    # A broken sink must never stop capture.
    view = memoryview(data)
    try:
        # Raw sinks (e.g. stdout under PYTHONUNBUFFERED) may accept only part
        # of the data, or return None when nothing could be written.
        while view:
            written = sink.write(view)
            view = view[written or 0:]
        sink.flush()
    except (OSError, ValueError) as e:
        logger.error(f"Error writing to output stream: {e}")


def drain(
    source: BinaryIO,
    sink: Optional[BinaryIO] = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> bytes:
    """
    Read source to end-of-stream, optionally tee'ing complete lines to sink.

    Args:
        source: Readable binary stream, typically a pipe from the child
        sink: Optional writable binary stream for local echoing
        chunk_size: Maximum bytes requested per read

    Returns:
        Everything read from source

    Raises:
        OSError: If reading from source fails; partial data is discarded
    """
    # read1 returns as soon as some data is available, which keeps tee live.
    read = getattr(source, "read1", source.read)

    captured = bytearray()
    forwarded = 0

    while True:
        chunk = read(chunk_size)
        if not chunk:
            break
        captured.extend(chunk)
        if sink is None:
            continue

        # Earlier bytes were already searched and held no terminator.
        end = _last_terminator(captured, max(forwarded, len(captured) - len(chunk)))
        if end < 0:
            # No complete line yet; keep buffering and try on the next read.
            continue
        _write_to_sink(sink, bytes(captured[forwarded:end + 1]))
        forwarded = end + 1

    if sink is not None and forwarded < len(captured):
        _write_to_sink(sink, bytes(captured[forwarded:]))

    return bytes(captured)


class StreamDrainer:
    """
    One named stream to drain on a worker thread.

    The supervisor creates one instance for stdout and one for stderr and
    submits `drain` to its thread pool.
    """

    def __init__(
        self,
        name: str,
        source: BinaryIO,
        sink: Optional[BinaryIO] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.name = name
        self.source = source
        self.sink = sink
        self.chunk_size = chunk_size

    def drain(self) -> bytes:
        """Drain the stream; see the module-level drain()."""
        data = drain(self.source, self.sink, self.chunk_size)
        logger.debug(f"Drained {len(data)} bytes from child {self.name}")
        return data

    def __repr__(self) -> str:
        tee = "tee" if self.sink is not None else "capture"
        return f"StreamDrainer({self.name!r}, {tee})"
