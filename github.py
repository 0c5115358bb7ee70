"""
GitHub backends via the gh CLI: pull request titles and recent PR listings.
gh must be installed and authenticated; failures are logged and reported as empty results.
"""
import asyncio
import json
import logging
import os
import re
from datetime import datetime, timedelta, timezone
from urllib.parse import urlparse

import config

log = logging.getLogger(__name__)

_PR_URL_RE = re.compile(r"github\.com/([^/]+)/([^/]+)/pull/(\d+)")

RECENT_HOURS = 18
SEARCH_LIMIT = 50


class GhError(RuntimeError):
    pass


def parse_pr_url(url: str) -> tuple[str, str, str] | None:
    """(owner, repo, number) for https://github.com/owner/repo/pull/123, else None."""
    m = _PR_URL_RE.search(url or "")
    if not m:
        return None
    return m.group(1), m.group(2), m.group(3)


def _gh_env() -> dict[str, str]:
    env = dict(os.environ)
    if config.GH_EXTRA_PATH:
        env["PATH"] = f"{env.get('PATH', '')}{os.pathsep}{config.GH_EXTRA_PATH}"
    return env


async def run_gh(*args: str) -> str:
    """Run gh with args; return stdout. Raises GhError on non-zero exit or timeout."""
    try:
        proc = await asyncio.create_subprocess_exec(
            "gh", *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=_gh_env(),
        )
    except OSError as e:
        raise GhError(f"gh not available: {e}") from e
    try:
        out, err = await asyncio.wait_for(proc.communicate(), timeout=config.GH_TIMEOUT)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise GhError(f"gh {' '.join(args[:2])} timed out after {config.GH_TIMEOUT:.0f}s")
    if proc.returncode != 0:
        raise GhError(f"gh exited {proc.returncode}: {err.decode('utf-8', errors='ignore')[:200]}")
    return out.decode("utf-8", errors="ignore")


async def fetch_pr_title(url: str) -> str:
    """'<PR title> · owner/repo#123' for a PR URL; empty string if not a PR or gh fails."""
    parsed = parse_pr_url(url)
    if not parsed:
        return ""
    owner, repo, number = parsed
    try:
        out = await run_gh("pr", "view", number, "--repo", f"{owner}/{repo}", "--json", "title", "--jq", ".title")
    except GhError as e:
        log.warning("gh command failed: %s", e)
        return ""
    title = out.strip()
    if not title:
        return ""
    return f"{title} · {owner}/{repo}#{number}"


async def search_recent_prs(qualifier: str, hours: int = RECENT_HOURS) -> list[dict]:
    """
    PRs updated in the last `hours`, e.g. qualifier "--author=@me" or "--involves=@me".
    Raises GhError if gh fails or returns something other than a JSON list.
    """
    since = (datetime.now(timezone.utc) - timedelta(hours=hours)).strftime("%Y-%m-%dT%H:%M:%SZ")
    out = await run_gh(
        "search", "prs", qualifier,
        "--updated", f">={since}",
        "--json", "number,title,updatedAt,url",
        "--limit", str(SEARCH_LIMIT),
    )
    try:
        prs = json.loads(out)
    except ValueError as e:
        raise GhError(f"gh returned invalid JSON: {e}") from e
    if not isinstance(prs, list):
        raise GhError("gh returned unexpected JSON")
    return prs


def format_pr(pr: dict) -> str:
    title = pr.get("title", "")
    number = pr.get("number", "")
    url = pr.get("url", "")
    parts = urlparse(url).path.split("/")
    if len(parts) > 2 and parts[1] and parts[2]:
        return f"- [{title} · {parts[1]}/{parts[2]}#{number}]({url})"
    return f"- [{title} #{number}]({url})"


def format_pr_list(prs: list[dict]) -> str:
    return "\n".join(format_pr(pr) for pr in prs)


async def recent_authored_prs_markdown() -> str:
    """Bullet list of my recently updated PRs; empty string if there are none."""
    return format_pr_list(await search_recent_prs("--author=@me"))


async def recent_involved_prs_markdown() -> str:
    """'### PRs' (authored) and '### Reviews' (involved, not authored) sections."""
    authored = await search_recent_prs("--author=@me")
    involved = await search_recent_prs("--involves=@me")
    authored_urls = {pr.get("url") for pr in authored}
    reviews = [pr for pr in involved if pr.get("url") not in authored_urls]
    return f"### PRs\n{format_pr_list(authored)}\n\n### Reviews\n{format_pr_list(reviews)}"
