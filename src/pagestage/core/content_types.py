"""Extension to content type mapping."""

import posixpath

from pagestage.core.types import ContentType, URLPath

_EXTENSIONS: dict[str, ContentType] = {
    ".css": ContentType.CSS,
    ".js": ContentType.JAVASCRIPT,
    ".json": ContentType.JSON,
    ".jpg": ContentType.JPEG,
    ".png": ContentType.PNG,
    ".txt": ContentType.PLAIN_TEXT,
}


def extension_of(url: URLPath) -> str:
    """Return the extension of the last url segment.

    Trailing slashes are ignored, so "/styles.css/" has extension ".css".
    A basename starting with a dot ("/.env") has no extension.

    Args:
        url: Request path

    Returns:
        Extension including the leading dot, or "" if there is none
    """
    stripped = url.rstrip("/")
    return posixpath.splitext(stripped)[1]


def resolve_content_type(extension: str) -> ContentType:
    """Map a file extension to its content type.

    The mapping is total: empty and unknown extensions are html.

    Args:
        extension: Extension with leading dot (e.g., ".css"), or ""

    Returns:
        Declared content type
    """
    return _EXTENSIONS.get(extension, ContentType.HTML)
