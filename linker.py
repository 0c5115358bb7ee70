"""
Paste/drop controller: turns an incoming URL into [title](url) without blocking the editor.

Flow for one event:
1) Gate (sync): setting enabled, event unclaimed, plain-text URL that is not an image
2) Claim the event (stop propagation / prevent default), continue as an asyncio task
3) Offline -> notice, nothing inserted
4) Inside "](" or after a quote -> insert as-is; selection + preserve setting -> [selection](url)
5) Insert [placeholder](url), resolve the title (hostname if blacklisted)
6) Re-read the document, find the placeholder, replace it with the escaped/shortened title

The document may change while the title is fetched; the placeholder is located again by
content, and if it is gone the result is dropped.
"""
import asyncio
import logging
import random
from enum import Enum
from typing import Awaitable, Callable
from urllib.parse import urlparse

import checks
import config
import connectivity
import github
from blacklist import is_blacklisted
from editor import ClipboardPort, EditorPort, NotifierPort, TransferEventPort, offset_to_position
from formatting import ResolvedTitle
from paste_id import PasteIdGenerator, PlaceholderToken
from settings import Settings, load_settings
from title_resolver import TitleResolver

log = logging.getLogger(__name__)

NO_CONNECTION_TITLE = "No internet connection. Cannot fetch title."
NO_CONNECTION_PRS = "No internet connection. Cannot fetch GitHub PRs."
NO_RECENT_PRS = "No recent PRs found."
FAILED_RECENT_PRS = "Failed to fetch recent PRs."
FAILED_INVOLVED_PRS = "Failed to fetch GitHub PRs."


class LinkState(Enum):
    IDLE = "idle"
    INTERCEPTED = "intercepted"
    PLACEHOLDER_INSERTED = "placeholder_inserted"
    RESOLVING = "resolving"
    REPLACED = "replaced"
    ABANDONED = "abandoned"
    INSERTED_VERBATIM = "inserted_verbatim"
    LINKED_SELECTION = "linked_selection"


def _hostname(url: str) -> str:
    try:
        return urlparse(url).hostname or url
    except ValueError:
        return url


class AutoLinker:
    """Orchestrates interception, placeholder insertion, title resolution and replacement."""

    def __init__(
        self,
        resolver: TitleResolver,
        notifier: NotifierPort,
        clipboard: ClipboardPort | None = None,
        *,
        settings_loader: Callable[[], Settings] = load_settings,
        online: Callable[[], Awaitable[bool]] = connectivity.is_online,
        rng: random.Random | None = None,
        authored_prs: Callable[[], Awaitable[str]] = github.recent_authored_prs_markdown,
        involved_prs: Callable[[], Awaitable[str]] = github.recent_involved_prs_markdown,
    ) -> None:
        self._resolver = resolver
        self._notifier = notifier
        self._clipboard = clipboard
        self._settings_loader = settings_loader
        self._online = online
        self._rng = rng or random.Random()
        self._authored_prs = authored_prs
        self._involved_prs = involved_prs
        # strong refs to in-flight resolutions; the loop only keeps weak ones
        self._tasks: set[asyncio.Task] = set()

    # Event interception

    def _intercept(self, event: TransferEventPort, enabled: bool) -> str | None:
        """Payload text if this event should be handled here (and claim it), else None."""
        if not enabled or event.default_prevented:
            return None
        text = event.get_data("text/plain") or ""
        if not text:
            return None
        # Image URLs have no meaningful <title>; leave them to the default handler.
        if not checks.is_url(text) or checks.is_image(text):
            return None
        event.stop_propagation()
        event.prevent_default()
        log.debug("%s: %s", LinkState.INTERCEPTED.value, text[:80])
        return text

    def _schedule(self, event: TransferEventPort, editor: EditorPort, enabled: bool) -> asyncio.Task | None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            log.warning("No running event loop; leaving event to the default handler")
            return None
        text = self._intercept(event, enabled)
        if text is None:
            return None
        task = loop.create_task(self._handle_intercepted(editor, text))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def on_paste(self, event: TransferEventPort, editor: EditorPort) -> asyncio.Task | None:
        """
        Editor paste hook; must be called from the running event loop.
        Returns the task when the paste was intercepted. The linker keeps its own
        reference, so hosts may ignore the return value.
        """
        return self._schedule(event, editor, self._settings_loader().enhance_default_paste)

    def on_drop(self, event: TransferEventPort, editor: EditorPort) -> asyncio.Task | None:
        """Editor drop hook. Same as on_paste, gated by the drop setting."""
        return self._schedule(event, editor, self._settings_loader().enhance_drop_events)

    async def _handle_intercepted(self, editor: EditorPort, text: str) -> LinkState:
        if not await self._online():
            self._notifier.notify(NO_CONNECTION_TITLE)
            return LinkState.ABANDONED
        return await self._link_or_insert(editor, text)

    async def _link_or_insert(self, editor: EditorPort, text: str) -> LinkState:
        # Pasting into a link the user is already writing: the title is theirs.
        if checks.is_markdown_link_already(editor) or checks.is_after_quote(editor):
            editor.replace_selection(text)
            return LinkState.INSERTED_VERBATIM

        url = text.strip()
        selected = (editor.get_selected_text() or "").strip()
        if selected and self._settings_loader().should_preserve_selection_as_title:
            editor.replace_selection(f"[{selected}]({url})")
            return LinkState.LINKED_SELECTION

        return await self.convert_url_to_titled_link(editor, url)

    # Placeholder protocol

    async def convert_url_to_titled_link(self, editor: EditorPort, url: str) -> LinkState:
        """Insert [placeholder](url) now, swap in the real title once it is known."""
        settings = self._settings_loader()
        token = PasteIdGenerator(settings.use_better_paste_id, self._rng).generate()

        editor.replace_selection(f"[{token.literal_text}]({url})")
        state = LinkState.PLACEHOLDER_INSERTED
        log.debug("%s: %s", state.value, url[:80])

        if is_blacklisted(url, settings.website_blacklist):
            title = _hostname(url)
            log.info("Blacklisted, using hostname %s", title)
        else:
            state = LinkState.RESOLVING
            log.debug("%s: %s", state.value, url[:80])
            title = await self._resolve(url)

        resolved = ResolvedTitle(title, settings.maximum_title_length)
        return self._replace_placeholder(editor, token, resolved.shortened, url)

    async def _resolve(self, url: str) -> str:
        try:
            return await self._resolver.resolve(url)
        except Exception:
            log.exception("Title resolver raised for %s", url[:80])
            return config.FALLBACK_TITLE

    def _replace_placeholder(self, editor: EditorPort, token: PlaceholderToken, title: str, url: str) -> LinkState:
        # Current text, not a snapshot: the user may have kept typing.
        text = editor.get_value()
        start = text.find(token.literal_text)
        if start < 0:
            log.info('Unable to find text "%s" in current editor, bailing out; link %s', token.visible_text, url)
            return LinkState.ABANDONED
        end = start + len(token.literal_text)
        editor.replace_range(title, offset_to_position(text, start), offset_to_position(text, end))
        return LinkState.REPLACED

    # Commands

    async def manual_paste(self, editor: EditorPort) -> LinkState:
        """Command "Paste URL and auto fetch title": clipboard text through the same flow."""
        text = await self._read_clipboard()
        if not await self._online():
            if text:
                editor.replace_selection(text)
            self._notifier.notify(NO_CONNECTION_TITLE)
            return LinkState.INSERTED_VERBATIM if text else LinkState.ABANDONED
        if not text:
            return LinkState.IDLE
        if not checks.is_url(text) or checks.is_image(text):
            editor.replace_selection(text)
            return LinkState.INSERTED_VERBATIM
        return await self._link_or_insert(editor, text)

    async def normal_paste(self, editor: EditorPort) -> LinkState:
        """Plain paste, no fetching."""
        text = await self._read_clipboard()
        if not text:
            return LinkState.IDLE
        editor.replace_selection(text)
        return LinkState.INSERTED_VERBATIM

    async def enhance_selected_link(self, editor: EditorPort) -> LinkState:
        """Selected bare URL or [label](url) -> freshly titled link."""
        selected = (editor.get_selected_text() or "").strip()
        link_regex = self._settings_loader().link_regex
        if checks.is_url(selected):
            url = selected
        elif checks.is_linked_url(selected, link_regex):
            url = checks.get_url_from_link(selected, link_regex)
        else:
            return LinkState.IDLE
        if not url:
            return LinkState.IDLE
        if not await self._online():
            self._notifier.notify(NO_CONNECTION_TITLE)
            return LinkState.ABANDONED
        return await self.convert_url_to_titled_link(editor, url)

    async def insert_recent_authored_prs(self, editor: EditorPort) -> bool:
        """Insert my GitHub PRs updated recently as a markdown list."""
        if not await self._online():
            self._notifier.notify(NO_CONNECTION_PRS)
            return False
        try:
            markdown = await self._authored_prs()
        except Exception as e:
            log.warning("gh command failed: %s", e)
            self._notifier.notify(FAILED_RECENT_PRS)
            return False
        if not markdown:
            self._notifier.notify(NO_RECENT_PRS)
            return False
        editor.replace_selection(markdown)
        return True

    async def insert_recent_involved_prs(self, editor: EditorPort) -> bool:
        """Insert recent PRs split into authored ("PRs") and others I am involved in ("Reviews")."""
        if not await self._online():
            self._notifier.notify(NO_CONNECTION_PRS)
            return False
        try:
            markdown = await self._involved_prs()
        except Exception as e:
            log.warning("gh command failed: %s", e)
            self._notifier.notify(FAILED_INVOLVED_PRS)
            return False
        editor.replace_selection(markdown)
        return True

    async def _read_clipboard(self) -> str:
        if self._clipboard is None:
            return ""
        try:
            return await self._clipboard.read_text() or ""
        except Exception as e:
            log.warning("Could not read clipboard: %s", e)
            return ""
