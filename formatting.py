"""
Make a fetched title safe and short enough for a markdown link label.
"""
import re
from dataclasses import dataclass

_UNESCAPE_RE = re.compile(r"\\([*_`~\\\[\]])")
_ESCAPE_RE = re.compile(r"([*_`|<>~\\\[\]])")

ELLIPSIS = "..."


def escape_markdown(text: str) -> str:
    """Backslash-escape * _ ` | < > ~ \\ [ ]; already-escaped characters are not doubled."""
    unescaped = _UNESCAPE_RE.sub(r"\1", text)
    return _ESCAPE_RE.sub(r"\\\1", unescaped)


def short_title(title: str, maximum_length: int) -> str:
    """Truncate to maximum_length + "..."; 0 disables, near-limit titles are kept whole."""
    if maximum_length == 0:
        return title
    if len(title) < maximum_length + len(ELLIPSIS):
        return title
    return f"{title[:maximum_length]}{ELLIPSIS}"


@dataclass(frozen=True)
class ResolvedTitle:
    raw: str
    maximum_length: int = 0

    @property
    def escaped(self) -> str:
        return escape_markdown(self.raw)

    @property
    def shortened(self) -> str:
        return short_title(self.escaped, self.maximum_length)
