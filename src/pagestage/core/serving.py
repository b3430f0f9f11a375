"""File serving with failure to status code mapping."""

import asyncio
import json
import logging
from pathlib import Path

from aiohttp import web

from pagestage.core.types import ContentType
from pagestage.errors import ParseError, ReadError, ServeError
from pagestage.logsink import LogSink, LogStream, log_event

logger = logging.getLogger(__name__)


class FileServer:
    """Turn a resolved file into an HTTP response.

    Failures never escape `serve()`: they are written to the error log and
    answered with an empty 500 response.
    """

    def __init__(self, sink: LogSink, not_found_page: str = "404.html") -> None:
        """Initialize file server.

        Args:
            sink: Destination for error log lines
            not_found_page: Basename of the not-found page, served with status 404
        """
        self._sink = sink
        self._not_found_page = not_found_page

    @property
    def not_found_page(self) -> str:
        return self._not_found_page

    async def serve(self, path: Path, content_type: ContentType) -> web.Response:
        """Read a file and build the response for it.

        Args:
            path: Resolved file path
            content_type: Declared content type, controls decoding and header

        Returns:
            200 (or 404 for the not-found page) with the file body,
            or an empty 500 if the file cannot be read or parsed
        """
        try:
            body = await self._load(path, content_type)
        except ServeError as e:
            logger.error(f"Failed to serve {path}: {e.log_message()}")
            await log_event(self._sink, LogStream.ERROR, e.log_message())
            return web.Response(status=500)

        status = 404 if path.name == self._not_found_page else 200
        return web.Response(
            status=status, body=body, content_type=content_type.value
        )

    async def _load(self, path: Path, content_type: ContentType) -> bytes:
        try:
            if content_type.is_binary:
                return await asyncio.to_thread(path.read_bytes)
            text = await asyncio.to_thread(
                path.read_text, encoding="utf-8", errors="replace"
            )
        except OSError as e:
            raise ReadError(f"{type(e).__name__}: {e}", path) from e

        if content_type is ContentType.JSON:
            return _normalize_json(text, path)
        return text.encode("utf-8")


def _normalize_json(text: str, path: Path) -> bytes:
    # NaN, Infinity and out-of-range numbers are not valid JSON output
    try:
        data = json.loads(text)
        normalized = json.dumps(
            data, ensure_ascii=False, allow_nan=False, separators=(",", ":")
        )
        return normalized.encode("utf-8")
    except (ValueError, RecursionError) as e:
        raise ParseError(f"{type(e).__name__}: {e}", path) from e
