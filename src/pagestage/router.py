"""Per-request dispatch.

Each request moves through Received -> Resolving -> one of
Serving / Redirecting / NotFound -> Completed. `RequestRouter.resolve()`
holds the whole branching decision so it can be tested without a server.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from aiohttp import web

from pagestage.core.content_types import extension_of, resolve_content_type
from pagestage.core.paths import PathResolver
from pagestage.core.redirects import RedirectRule, RedirectTable
from pagestage.core.serving import FileServer
from pagestage.core.types import ContentType, URLPath
from pagestage.logsink import LogSink, LogStream, log_event

logger = logging.getLogger(__name__)


class RouteState(Enum):
    """Request handling states."""

    RECEIVED = "received"
    RESOLVING = "resolving"
    SERVING = "serving"
    REDIRECTING = "redirecting"
    NOT_FOUND = "not_found"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Dispatch:
    """Outcome of resolving a request url.

    For SERVING and NOT_FOUND, `path` and `content_type` are what the file
    server is asked to send. For REDIRECTING, `redirect` is the matched rule.
    """

    state: RouteState
    path: Path
    content_type: ContentType
    redirect: RedirectRule | None = None


class RequestRouter:
    """Resolve requests to files, redirects or the not-found page."""

    def __init__(
        self,
        resolver: PathResolver,
        redirects: RedirectTable,
        file_server: FileServer,
        sink: LogSink,
    ) -> None:
        """Initialize router.

        Args:
            resolver: Url to filesystem path resolver
            redirects: Legacy redirect rules, consulted on resolution miss
            file_server: Serves resolved files and the not-found page
            sink: Destination for request log lines
        """
        self._resolver = resolver
        self._redirects = redirects
        self._file_server = file_server
        self._sink = sink

    @property
    def not_found_path(self) -> Path:
        return self._resolver.document_root / self._file_server.not_found_page

    def resolve(self, url: URLPath) -> Dispatch:
        """Decide how a url is answered.

        Args:
            url: Request path

        Returns:
            Dispatch in state SERVING, REDIRECTING or NOT_FOUND
        """
        content_type = resolve_content_type(extension_of(url))
        path = self._resolver.resolve(url, content_type)

        if _exists(path):
            return Dispatch(RouteState.SERVING, path, content_type)

        rule = self._redirects.lookup(path.name)
        if rule is not None:
            return Dispatch(RouteState.REDIRECTING, path, content_type, redirect=rule)

        return Dispatch(RouteState.NOT_FOUND, self.not_found_path, ContentType.HTML)

    async def handle(self, request: web.Request) -> web.Response:
        """aiohttp handler for every method and path."""
        logger.debug(f"{request.raw_path} {request.method}")
        await log_event(
            self._sink, LogStream.REQUEST, f"{request.raw_path}\t{request.method}"
        )

        dispatch = self.resolve(URLPath(request.path))

        if dispatch.state is RouteState.REDIRECTING and dispatch.redirect is not None:
            return web.Response(
                status=dispatch.redirect.status_code,
                headers={"Location": dispatch.redirect.target},
            )

        return await self._file_server.serve(dispatch.path, dispatch.content_type)


def _exists(path: Path) -> bool:
    # Unreachable paths (name too long, unsearchable parent) count as absent
    try:
        return path.exists()
    except OSError:
        return False
