"""Application keys for type-safe app configuration access."""

from aiohttp import web

from pagestage.config import Config
from pagestage.logsink import FileLogSink
from pagestage.router import RequestRouter

config_key = web.AppKey("config", Config)
router_key = web.AppKey("router", RequestRouter)
file_sink_key = web.AppKey("file_sink", FileLogSink)
