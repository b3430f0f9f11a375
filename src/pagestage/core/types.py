"""Core type definitions."""

from enum import StrEnum
from typing import NewType

# Request path as received (e.g., "/", "/about", "/css/style.css")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)


class ContentType(StrEnum):
    """Declared content types the server knows how to send."""

    CSS = "text/css"
    JAVASCRIPT = "text/javascript"
    JSON = "application/json"
    JPEG = "image/jpeg"
    PNG = "image/png"
    PLAIN_TEXT = "text/plain"
    HTML = "text/html"

    @property
    def is_binary(self) -> bool:
        """Whether files of this type are sent as raw bytes."""
        return self in (ContentType.JPEG, ContentType.PNG)
