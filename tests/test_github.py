"""Tests for github module (gh CLI helpers; gh itself is faked)."""
import asyncio
import json

import pytest

import github


def test_parse_pr_url():
    assert github.parse_pr_url("https://github.com/acme/widgets/pull/42") == ("acme", "widgets", "42")
    assert github.parse_pr_url("https://github.com/acme/widgets/pull/42/files") == ("acme", "widgets", "42")
    assert github.parse_pr_url("https://github.com/acme/widgets/issues/42") is None
    assert github.parse_pr_url("") is None


def test_fetch_pr_title(monkeypatch):
    calls = []

    async def fake_run_gh(*args):
        calls.append(args)
        return "Fix bug\n"

    monkeypatch.setattr("github.run_gh", fake_run_gh)
    title = asyncio.run(github.fetch_pr_title("https://github.com/acme/widgets/pull/42"))
    assert title == "Fix bug · acme/widgets#42"
    assert calls[0] == ("pr", "view", "42", "--repo", "acme/widgets", "--json", "title", "--jq", ".title")


def test_fetch_pr_title_failure_is_empty(monkeypatch):
    async def failing(*args):
        raise github.GhError("not logged in")

    monkeypatch.setattr("github.run_gh", failing)
    assert asyncio.run(github.fetch_pr_title("https://github.com/acme/widgets/pull/42")) == ""


def test_fetch_pr_title_not_a_pr():
    assert asyncio.run(github.fetch_pr_title("https://example.com/page")) == ""


def test_run_gh_missing_binary(monkeypatch):
    async def no_exec(*args, **kwargs):
        raise FileNotFoundError("gh")

    monkeypatch.setattr("github.asyncio.create_subprocess_exec", no_exec)
    with pytest.raises(github.GhError):
        asyncio.run(github.run_gh("--version"))


def test_gh_env_extends_path(monkeypatch):
    monkeypatch.setenv("PATH", "/usr/bin")
    monkeypatch.setattr("github.config.GH_EXTRA_PATH", "/opt/homebrew/bin")
    assert github._gh_env()["PATH"].endswith("/opt/homebrew/bin")


def test_format_pr():
    pr = {"number": 7, "title": "Add thing", "url": "https://github.com/acme/widgets/pull/7"}
    assert github.format_pr(pr) == "- [Add thing · acme/widgets#7](https://github.com/acme/widgets/pull/7)"
    assert github.format_pr({"number": 1, "title": "T", "url": "weird"}) == "- [T #1](weird)"


def test_search_recent_prs(monkeypatch):
    seen = []

    async def fake_run_gh(*args):
        seen.append(args)
        return json.dumps([{"number": 1, "title": "A", "url": "https://github.com/o/r/pull/1"}])

    monkeypatch.setattr("github.run_gh", fake_run_gh)
    prs = asyncio.run(github.search_recent_prs("--author=@me"))
    assert prs[0]["number"] == 1
    args = seen[0]
    assert args[:3] == ("search", "prs", "--author=@me")
    assert args[args.index("--updated") + 1].startswith(">=")


def test_search_recent_prs_invalid_json(monkeypatch):
    async def fake_run_gh(*args):
        return "oops"

    monkeypatch.setattr("github.run_gh", fake_run_gh)
    with pytest.raises(github.GhError):
        asyncio.run(github.search_recent_prs("--author=@me"))


def test_involved_prs_markdown_splits_reviews(monkeypatch):
    mine = {"number": 1, "title": "Mine", "url": "https://github.com/o/r/pull/1"}
    other = {"number": 2, "title": "Theirs", "url": "https://github.com/o/r/pull/2"}

    async def fake_search(qualifier, hours=github.RECENT_HOURS):
        return [mine] if qualifier == "--author=@me" else [mine, other]

    monkeypatch.setattr("github.search_recent_prs", fake_search)
    md = asyncio.run(github.recent_involved_prs_markdown())
    assert md == (
        "### PRs\n- [Mine · o/r#1](https://github.com/o/r/pull/1)\n\n"
        "### Reviews\n- [Theirs · o/r#2](https://github.com/o/r/pull/2)"
    )
