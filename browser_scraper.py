"""
Browser-rendering title scraper: loads the page in headless Chromium so script-built titles resolve.
"""
import logging

from rebrowser_playwright.async_api import async_playwright

import config

log = logging.getLogger(__name__)

# Desktop Chrome user agent.
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/113.0.0.0 Safari/537.36"
)


async def fetch_rendered_title(url: str) -> str:
    """document.title after DOMContentLoaded; empty string on navigation or launch failure."""
    if not url or not url.startswith(("http://", "https://")):
        return ""
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                context = await browser.new_context(user_agent=USER_AGENT)
                page = await context.new_page()
                await page.goto(url, wait_until="domcontentloaded", timeout=config.BROWSER_TIMEOUT_MS)
                title = await page.title()
            finally:
                await browser.close()
        return " ".join((title or "").split())
    except Exception as e:
        log.warning("Browser scrape of %s failed: %s", url[:80], e)
        return ""
