"""
Page title backends over HTTP (aiohttp): LinkPreview metadata API and a lightweight <title> scraper.
Both return an empty string on any failure; callers fall through to the next backend.
"""
import logging
import re
from html import unescape

import aiohttp

import config

log = logging.getLogger(__name__)

_TITLE_TIMEOUT = aiohttp.ClientTimeout(total=10)
_TITLE_MAX_BYTES = 512 * 1024  # 512 KB
_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE | re.DOTALL)
_OG_TITLE_RE = re.compile(
    r"<meta[^>]+property=[\"']og:title[\"'][^>]*content=[\"']([^\"']+)[\"']", re.IGNORECASE
)
_API_KEY_LENGTH = 32


def parse_title(html: str) -> str:
    """<title> text (falls back to og:title), entity-decoded and whitespace-collapsed."""
    m = _TITLE_RE.search(html) or _OG_TITLE_RE.search(html)
    if not m:
        return ""
    title = unescape(m.group(1)).strip()
    return " ".join(title.split())


async def fetch_page_title(url: str) -> str:
    """GET url (size-capped), parse <title>. Returns stripped title or empty string."""
    if not url or not url.startswith(("http://", "https://")):
        return ""
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(
                url,
                timeout=_TITLE_TIMEOUT,
                headers={"User-Agent": config.USER_AGENT},
            ) as r:
                r.raise_for_status()
                if "html" not in (r.headers.get("Content-Type") or "text/html").lower():
                    log.debug("Not an HTML page: %s", url[:80])
                    return ""
                raw = b""
                async for chunk in r.content.iter_chunked(8192):
                    raw += chunk
                    if len(raw) >= _TITLE_MAX_BYTES:
                        break
        return parse_title(raw.decode("utf-8", errors="ignore"))
    except Exception as e:
        log.debug("Fetch title for %s: %s", url[:80], e)
        return ""


async def fetch_link_preview_title(url: str, api_key: str) -> str:
    """Title from the LinkPreview API. Skipped (empty) unless the key is exactly 32 chars."""
    if len(api_key or "") != _API_KEY_LENGTH:
        log.error("LinkPreview API key is not %d characters long, please check your settings", _API_KEY_LENGTH)
        return ""
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(
                config.LINKPREVIEW_ENDPOINT,
                params={"q": url},
                timeout=_TITLE_TIMEOUT,
                headers={"X-Linkpreview-Api-Key": api_key},
            ) as r:
                r.raise_for_status()
                data = await r.json(content_type=None)
        title = data.get("title") if isinstance(data, dict) else None
        return title if isinstance(title, str) else ""
    except Exception as e:
        log.warning("LinkPreview lookup for %s failed: %s", url[:80], e)
        return ""
