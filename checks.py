"""
Predicates deciding whether pasted text should become a titled link.
All checks return False on malformed input instead of raising.
"""
import re
from urllib.parse import urlparse

import validators

from editor import EditorPort, Position

_IMAGE_EXTENSIONS = (
    ".gif", ".jpg", ".jpeg", ".tif", ".tiff", ".png", ".webp",
    ".bmp", ".tga", ".psd", ".ai", ".svg", ".ico", ".avif",
)
_QUOTES = ('"', "'")


def is_url(text: str) -> bool:
    """True if the trimmed text is a single absolute URL."""
    t = (text or "").strip()
    if not t or any(c.isspace() for c in t):
        return False
    try:
        # bare query keys (?ref&x=1) and dotless hosts (localhost) are valid URLs
        return validators.url(t, strict_query=False, simple_host=True) is True
    except Exception:
        return False


def is_image(text: str) -> bool:
    """True if the URL path ends in a known image extension."""
    try:
        path = urlparse((text or "").strip()).path
    except ValueError:
        return False
    return path.lower().endswith(_IMAGE_EXTENSIONS)


def _link_match(text: str, link_regex: str) -> re.Match | None:
    try:
        return re.match(link_regex, (text or "").strip())
    except re.error:
        return None


def is_linked_url(text: str, link_regex: str) -> bool:
    """True if text is a markdown link: [label](url)."""
    return _link_match(text, link_regex) is not None


def get_url_from_link(text: str, link_regex: str) -> str | None:
    m = _link_match(text, link_regex)
    if not m:
        return None
    try:
        return m.group(2)
    except IndexError:
        return None


def _before_cursor(editor: EditorPort, count: int) -> str:
    cursor = editor.get_cursor()
    if cursor.ch < count:
        return ""
    return editor.get_range(Position(cursor.line, cursor.ch - count), cursor)


def is_markdown_link_already(editor: EditorPort) -> bool:
    """Cursor sits right after "](", i.e. in the URL part of a link being typed."""
    return _before_cursor(editor, 2) == "]("


def is_after_quote(editor: EditorPort) -> bool:
    """Cursor follows a quote, e.g. href="|"; the raw URL is wanted there."""
    return _before_cursor(editor, 1) in _QUOTES
