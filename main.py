"""
Auto Link Title: turn URLs into markdown links titled with the page title.
Command-line front end over the same controller an editor integration uses.

  python main.py title URL          resolved title
  python main.py link URL           [title](URL), pasted into an in-memory buffer
  python main.py prs [--involved]   recent GitHub PRs as markdown
"""
import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

load_dotenv()

from editor import LogNotifier, StaticClipboard, TextBuffer, TextEvent  # noqa: E402
from linker import AutoLinker, LinkState  # noqa: E402
from title_resolver import TitleResolver  # noqa: E402

log = logging.getLogger(__name__)


def _build_linker(clipboard_text: str = "") -> AutoLinker:
    return AutoLinker(TitleResolver(), LogNotifier(), StaticClipboard(clipboard_text))


async def _title(url: str) -> int:
    print(await TitleResolver().resolve(url))
    return 0


async def _link(url: str) -> int:
    linker = _build_linker(url)
    buffer = TextBuffer()
    task = linker.on_paste(TextEvent(url), buffer)
    if task is None:
        # Not handled (not a URL, image URL, or paste enhancement disabled): plain paste.
        state = await linker.normal_paste(buffer)
    else:
        state = await task
    log.debug("Final state: %s", state.value)
    print(buffer.get_value())
    return 0 if state is not LinkState.ABANDONED else 1


async def _prs(involved: bool) -> int:
    linker = _build_linker()
    buffer = TextBuffer()
    if involved:
        ok = await linker.insert_recent_involved_prs(buffer)
    else:
        ok = await linker.insert_recent_authored_prs(buffer)
    if ok:
        print(buffer.get_value())
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Markdown links with fetched page titles.")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)
    p_title = sub.add_parser("title", help="print the resolved title for URL")
    p_title.add_argument("url")
    p_link = sub.add_parser("link", help="print [title](URL)")
    p_link.add_argument("url")
    p_prs = sub.add_parser("prs", help="print recently updated GitHub PRs")
    p_prs.add_argument("--involved", action="store_true", help="also list PRs I review or am mentioned in")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )

    if args.command == "title":
        return asyncio.run(_title(args.url))
    if args.command == "link":
        return asyncio.run(_link(args.url))
    return asyncio.run(_prs(args.involved))


if __name__ == "__main__":
    sys.exit(main())
