"""
Title resolution cascade: GitHub PR (gh) -> LinkPreview API -> scraper fallback.
Each stage swallows its own errors; resolve() always returns a non-empty single-line title.
"""
import logging
import re
from dataclasses import dataclass
from typing import Awaitable, Callable

import browser_scraper
import config
import github
import link_metadata
from settings import Settings, load_settings

log = logging.getLogger(__name__)

_LINE_BREAKS_RE = re.compile(r"\r\n|\n|\r")

TitleFetcher = Callable[[str], Awaitable[str]]
ApiTitleFetcher = Callable[[str, str], Awaitable[str]]


@dataclass(frozen=True)
class FetchRequest:
    url: str


def normalize_title(title: str) -> str:
    """Drop line breaks and trim; empty becomes the fallback title."""
    return _LINE_BREAKS_RE.sub("", title or "").strip() or config.FALLBACK_TITLE


class TitleResolver:
    def __init__(
        self,
        settings_loader: Callable[[], Settings] = load_settings,
        *,
        pr_title: TitleFetcher = github.fetch_pr_title,
        link_preview: ApiTitleFetcher = link_metadata.fetch_link_preview_title,
        http_scraper: TitleFetcher = link_metadata.fetch_page_title,
        rendered_scraper: TitleFetcher = browser_scraper.fetch_rendered_title,
    ) -> None:
        self._settings_loader = settings_loader
        self._pr_title = pr_title
        self._link_preview = link_preview
        self._http_scraper = http_scraper
        self._rendered_scraper = rendered_scraper

    async def _stage(self, name: str, fetch: Callable[[], Awaitable[str]], url: str) -> str:
        try:
            title = await fetch()
        except Exception as e:
            log.warning("%s failed for %s: %s", name, url[:80], e)
            return ""
        title = title if isinstance(title, str) else ""
        log.debug("Title via %s: %r", name, title)
        return title.strip()

    async def fetch_title(self, request: FetchRequest) -> str:
        """Raw title from the first stage that yields one; empty string if none do."""
        url = request.url
        settings = self._settings_loader()

        if github.parse_pr_url(url):
            log.info("Fetching GitHub PR title via gh CLI")
            title = await self._stage("gh", lambda: self._pr_title(url), url)
            if title:
                return title

        title = await self._stage(
            "LinkPreview", lambda: self._link_preview(url, settings.link_preview_api_key), url
        )
        if title:
            return title

        log.info("Title via LinkPreview failed, falling back to scraper")
        if settings.use_new_scraper:
            return await self._stage("HTTP scraper", lambda: self._http_scraper(url), url)
        return await self._stage("browser scraper", lambda: self._rendered_scraper(url), url)

    async def resolve(self, url: str) -> str:
        """Best-effort title for url. Never raises."""
        try:
            title = await self.fetch_title(FetchRequest(url))
        except Exception:
            log.exception("Title resolution failed for %s", url[:80])
            title = ""
        title = normalize_title(title)
        log.info("Title: %s", title)
        return title
