"""aiohttp server for Pagestage.

Application factory and a single catch-all route handled by RequestRouter.
"""

import logging

from aiohttp import web

from pagestage.app_keys import config_key, file_sink_key, router_key
from pagestage.config import Config
from pagestage.core.paths import PathResolver
from pagestage.core.redirects import RedirectTable
from pagestage.core.serving import FileServer
from pagestage.logsink import FileLogSink, LogSink
from pagestage.router import RequestRouter

logger = logging.getLogger(__name__)


def create_app(
    config: Config,
    *,
    sink: LogSink | None = None,
    redirects: RedirectTable | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        sink: Log sink for request/error lines (default: FileLogSink in
            config.logs.log_dir, started and stopped with the app)
        redirects: Redirect table (default: the built-in legacy rules)

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    if sink is None:
        file_sink = FileLogSink(
            config.logs.log_dir,
            request_log=config.logs.request_log,
            error_log=config.logs.error_log,
        )
        app[file_sink_key] = file_sink
        app.on_startup.append(_start_log_sink)
        app.on_cleanup.append(_stop_log_sink)
        sink = file_sink

    router = RequestRouter(
        PathResolver(config.site.document_root, config.site.asset_root),
        redirects if redirects is not None else RedirectTable(),
        FileServer(sink, config.site.not_found_page),
        sink,
    )

    app[config_key] = config
    app[router_key] = router

    app.router.add_route("*", "/{path:.*}", router.handle)

    return app


async def _start_log_sink(app: web.Application) -> None:
    """Start the log writer on application startup."""
    await app[file_sink_key].start()


async def _stop_log_sink(app: web.Application) -> None:
    """Flush and stop the log writer on application cleanup."""
    await app[file_sink_key].stop()


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration
    """
    app = create_app(config)
    logger.info(f"Server running on port {config.server.port}")
    web.run_app(
        app,
        host=config.server.host,
        port=config.server.port,
        print=None,
    )
