"""Request path to filesystem path resolution."""

import posixpath
from pathlib import Path

from pagestage.core.content_types import extension_of
from pagestage.core.types import ContentType, URLPath

INDEX_FILENAME = "index.html"
PAGE_SUFFIX = ".html"
INDEX_STEM = "index"


class PathResolver:
    """Resolve request urls to candidate files under the site roots.

    Html pages live under the document root, every other content type under
    the asset root. Resolution is pure string composition: existence is
    checked by the caller.
    """

    def __init__(self, document_root: Path, asset_root: Path) -> None:
        """Initialize resolver.

        Args:
            document_root: Directory holding html pages, index.html and 404.html
            asset_root: Directory holding non-html static files
        """
        self._document_root = document_root
        self._asset_root = asset_root

    @property
    def document_root(self) -> Path:
        return self._document_root

    @property
    def asset_root(self) -> Path:
        return self._asset_root

    def resolve(self, url: URLPath, content_type: ContentType) -> Path:
        """Resolve url to a filesystem path.

        Rules, in order:
            1. html "/"             -> <document_root>/index.html
            2. html ending in "/"   -> <document_root>/<url>/index.html
            3. other html           -> <document_root>/<url>
            4. non-html             -> <asset_root>/<url>
        An extensionless url not ending in "/" then gets ".html" appended,
        whichever rule produced the path.

        Args:
            url: Request path
            content_type: Content type resolved from the url's extension

        Returns:
            Candidate file path
        """
        relative = _relative(url)

        if content_type is ContentType.HTML and url == "/":
            path = self._document_root / INDEX_FILENAME
        elif content_type is ContentType.HTML and url.endswith("/"):
            path = self._document_root / relative / INDEX_FILENAME
        elif content_type is ContentType.HTML:
            path = self._document_root / (relative or INDEX_STEM)
        else:
            path = self._asset_root / relative

        if not extension_of(url) and not url.endswith("/"):
            path = path.with_name(path.name + PAGE_SUFFIX)

        return path


def _relative(url: URLPath) -> str:
    # Collapse ".." against "/" so the result stays below the root
    normalized = posixpath.normpath("/" + url)
    return normalized.lstrip("/")
