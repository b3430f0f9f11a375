"""Legacy url redirects.

Consulted only when a request resolves to a file that does not exist.
"""

from dataclasses import dataclass

MOVED_PERMANENTLY = 301


@dataclass(frozen=True)
class RedirectRule:
    """Redirect for a legacy page basename."""

    match_basename: str
    target: str
    status_code: int = MOVED_PERMANENTLY


DEFAULT_RULES: tuple[RedirectRule, ...] = (
    RedirectRule("old-page.html", "/new-page.html"),
    RedirectRule("www-page.html", "/"),
)


class RedirectTable:
    """Immutable lookup of redirect rules by basename."""

    def __init__(self, rules: tuple[RedirectRule, ...] = DEFAULT_RULES) -> None:
        self._rules = {rule.match_basename: rule for rule in rules}

    def __len__(self) -> int:
        return len(self._rules)

    def lookup(self, basename: str) -> RedirectRule | None:
        """Find the rule for a resolved file basename.

        Args:
            basename: File name of the resolved path (e.g., "old-page.html")

        Returns:
            Matching rule or None
        """
        return self._rules.get(basename)
