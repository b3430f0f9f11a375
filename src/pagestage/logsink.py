"""Append-only request and error logs.

Log lines are written by a single background task so that request handling
never waits on disk. Each line has the form:

    20240131	14:05:09	<uuid4>	<message>
"""

import asyncio
import logging
import uuid
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Protocol

from pagestage.errors import SinkError

logger = logging.getLogger(__name__)


class LogStream(StrEnum):
    """Destination log of a line."""

    REQUEST = "request"
    ERROR = "error"


class LogSink(Protocol):
    """Durable writer for pre-formatted log lines."""

    async def append(self, stream: LogStream, line: str) -> None: ...


def format_log_line(
    message: str,
    *,
    now: datetime | None = None,
    event_id: str | None = None,
) -> str:
    """Format a log message as a tab-separated line.

    Args:
        message: Event message
        now: Timestamp (default: current local time)
        event_id: Unique event id (default: random uuid4)

    Returns:
        Line terminated with a newline
    """
    if now is None:
        now = datetime.now()
    if event_id is None:
        event_id = str(uuid.uuid4())
    return f"{now:%Y%m%d\t%H:%M:%S}\t{event_id}\t{message}\n"


async def log_event(sink: LogSink, stream: LogStream, message: str) -> None:
    """Format and append a message to a sink.

    Sink failures are reported through the logging module only.
    """
    try:
        await sink.append(stream, format_log_line(message))
    except SinkError as e:
        logger.warning(f"Could not write {stream} log: {e}")


class FileLogSink:
    """LogSink writing each stream to its own file in a log directory.

    `append` only enqueues the line. A writer task started by `start()`
    drains the queue in order, so lines within a stream keep their emission
    order.
    """

    def __init__(
        self,
        log_dir: Path,
        *,
        request_log: str = "reqLog.txt",
        error_log: str = "errLog.txt",
    ) -> None:
        """Initialize the sink.

        Args:
            log_dir: Directory for log files (created on first write)
            request_log: File name of the request log
            error_log: File name of the error log
        """
        self._log_dir = log_dir
        self._files = {
            LogStream.REQUEST: log_dir / request_log,
            LogStream.ERROR: log_dir / error_log,
        }
        self._queue: asyncio.Queue[tuple[LogStream, str]] = asyncio.Queue()
        self._writer_task: asyncio.Task[None] | None = None

    @property
    def log_dir(self) -> Path:
        return self._log_dir

    def path_for(self, stream: LogStream) -> Path:
        """Return the file a stream is written to."""
        return self._files[stream]

    async def append(self, stream: LogStream, line: str) -> None:
        self._queue.put_nowait((stream, line))

    async def start(self) -> None:
        """Start the background writer."""
        if self._writer_task is not None:
            return
        self._writer_task = asyncio.create_task(self._drain())

    async def stop(self) -> None:
        """Flush pending lines and stop the background writer."""
        if self._writer_task is None:
            return
        await self._queue.join()
        self._writer_task.cancel()
        try:
            await self._writer_task
        except asyncio.CancelledError:
            pass
        self._writer_task = None

    async def _drain(self) -> None:
        while True:
            stream, line = await self._queue.get()
            try:
                await asyncio.to_thread(self.write, stream, line)
            except SinkError as e:
                logger.warning(f"Dropped {stream} log line: {e}")
            finally:
                self._queue.task_done()

    def write(self, stream: LogStream, line: str) -> None:
        """Append a line to the stream's file synchronously.

        Raises:
            SinkError: If the directory or file cannot be written
        """
        path = self._files[stream]
        try:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8", errors="backslashreplace") as f:
                f.write(line)
        except (OSError, ValueError) as e:
            raise SinkError(f"{path}: {e}") from e
