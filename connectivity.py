"""
Online check before any fetch: a small HEAD request, run off the event loop.
"""
import asyncio
import logging

import requests

import config

log = logging.getLogger(__name__)


def check_online(timeout: float | None = None) -> bool:
    """True if the check URL answers with any HTTP response."""
    if not config.CONNECTIVITY_CHECK_URL:
        return True
    try:
        requests.head(
            config.CONNECTIVITY_CHECK_URL,
            timeout=timeout or config.CONNECTIVITY_TIMEOUT,
            allow_redirects=False,
        )
        return True
    except requests.RequestException as e:
        log.info("Offline: %s", e)
        return False


async def is_online() -> bool:
    return await asyncio.to_thread(check_online)
