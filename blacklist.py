"""
Website blacklist: URLs containing any listed substring skip title fetching.
The raw setting is passed in per call, so edits apply without a restart.
"""
import re

_SPLIT_RE = re.compile(r",|\n")


def parse_blacklist(raw: str) -> list[str]:
    """Split on commas/newlines, trim, drop empty entries."""
    return [s.strip() for s in _SPLIT_RE.split(raw or "") if s.strip()]


def is_blacklisted(url: str, raw: str) -> bool:
    return any(site in url for site in parse_blacklist(raw))
