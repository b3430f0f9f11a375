"""Shared test fixtures."""

from pathlib import Path

import pytest
from pagestage.config import Config, LogConfig, ServerConfig, SiteConfig
from pagestage.errors import SinkError
from pagestage.logsink import LogStream

INDEX_HTML = "<h1>Home</h1>"
NOT_FOUND_HTML = "<h1>Not Found</h1>"


class RecordingSink:
    """In-memory LogSink that keeps every appended line."""

    def __init__(self) -> None:
        self.lines: list[tuple[LogStream, str]] = []

    async def append(self, stream: LogStream, line: str) -> None:
        self.lines.append((stream, line))

    def messages(self, stream: LogStream) -> list[str]:
        """Return messages (last tab-separated field) written to a stream."""
        return [
            line.rstrip("\n").split("\t")[-1]
            for s, line in self.lines
            if s is stream
        ]


class FailingSink:
    """LogSink whose writes always fail."""

    async def append(self, stream: LogStream, line: str) -> None:
        raise SinkError("disk full")


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create a site with a document root and an asset root.

    Layout:
        site/views/index.html
        site/views/404.html
        site/views/about.html
        site/views/blog/index.html
        site/css/style.css
        site/data/data.json
        site/img/logo.png
    """
    site = tmp_path / "site"
    views = site / "views"
    (views / "blog").mkdir(parents=True)
    (views / "index.html").write_text(INDEX_HTML)
    (views / "404.html").write_text(NOT_FOUND_HTML)
    (views / "about.html").write_text("<h1>About</h1>")
    (views / "blog" / "index.html").write_text("<h1>Blog</h1>")

    (site / "css").mkdir()
    (site / "css" / "style.css").write_text("body { color: red; }")
    (site / "data").mkdir()
    (site / "data" / "data.json").write_text(
        '{\n  "name": "pagestage",\n  "tags": [1, 2]\n}'
    )
    (site / "img").mkdir()
    (site / "img" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\xff")
    return site


@pytest.fixture
def test_config(tmp_path: Path, site_dir: Path) -> Config:
    """Create a test configuration pointing at site_dir."""
    return Config(
        server=ServerConfig(),
        site=SiteConfig(document_root=site_dir / "views", asset_root=site_dir),
        logs=LogConfig(log_dir=tmp_path / "logs"),
    )
