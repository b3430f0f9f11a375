"""Exception hierarchy for Pagestage."""

from pathlib import Path


class PagestageError(Exception):
    """Base class for all Pagestage errors."""


class ConfigError(PagestageError, ValueError):
    """Configuration file or value is invalid."""


class ServeError(PagestageError):
    """A resolved file could not be turned into a response body.

    Attributes:
        path: File that was being served
    """

    category = "ServeError"

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path

    def log_message(self) -> str:
        """Format as "<category>: <message>" for the error log."""
        return f"{self.category}: {self}"


class ReadError(ServeError):
    """Filesystem read failed (missing, permissions, I/O fault)."""

    category = "ReadError"


class ParseError(ServeError):
    """File content could not be decoded for its content type."""

    category = "ParseError"


class SinkError(PagestageError):
    """Writing a log line failed."""
