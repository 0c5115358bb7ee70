"""
Editor, event, clipboard and notifier ports, plus in-memory implementations.
The host editor owns the document; the core only talks to it through EditorPort.
"""
import logging
from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line and column (character offset within the line)."""

    line: int
    ch: int


class EditorPort(Protocol):
    def get_selected_text(self) -> str:
        ...

    def replace_selection(self, text: str) -> None:
        ...

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        ...

    def get_value(self) -> str:
        ...

    def get_cursor(self) -> Position:
        ...

    def get_range(self, start: Position, end: Position) -> str:
        ...


class TransferEventPort(Protocol):
    """Paste (clipboard) or drop (drag) event."""

    default_prevented: bool

    def get_data(self, mime_type: str) -> str:
        ...

    def prevent_default(self) -> None:
        ...

    def stop_propagation(self) -> None:
        ...


class ClipboardPort(Protocol):
    async def read_text(self) -> str:
        ...


class NotifierPort(Protocol):
    def notify(self, message: str) -> None:
        ...


def offset_to_position(text: str, offset: int) -> Position:
    """Translate a character offset in text to a line/column position."""
    offset = max(0, min(offset, len(text)))
    before = text[:offset]
    line = before.count("\n")
    return Position(line, offset - (before.rfind("\n") + 1))


def position_to_offset(text: str, pos: Position) -> int:
    lines = text.split("\n")
    line = max(0, min(pos.line, len(lines) - 1))
    offset = sum(len(l) + 1 for l in lines[:line])
    return offset + max(0, min(pos.ch, len(lines[line])))


class TextBuffer:
    """In-memory EditorPort: a string plus a selection (anchor/head offsets)."""

    def __init__(self, text: str = "", selection: tuple[int, int] | None = None) -> None:
        self.text = text
        if selection is None:
            selection = (len(text), len(text))
        self.anchor, self.head = selection

    def _selection_bounds(self) -> tuple[int, int]:
        return min(self.anchor, self.head), max(self.anchor, self.head)

    def select(self, start: int, end: int) -> None:
        self.anchor, self.head = start, end

    def get_selected_text(self) -> str:
        start, end = self._selection_bounds()
        return self.text[start:end]

    def replace_selection(self, text: str) -> None:
        start, end = self._selection_bounds()
        self.text = self.text[:start] + text + self.text[end:]
        self.anchor = self.head = start + len(text)

    def replace_range(self, text: str, start: Position, end: Position) -> None:
        s = position_to_offset(self.text, start)
        e = position_to_offset(self.text, end)
        delta = len(text) - (e - s)
        self.text = self.text[:s] + text + self.text[e:]
        # keep the selection anchored to the surrounding text
        if self.anchor >= e:
            self.anchor += delta
        if self.head >= e:
            self.head += delta

    def get_value(self) -> str:
        return self.text

    def get_cursor(self) -> Position:
        return offset_to_position(self.text, self.head)

    def get_range(self, start: Position, end: Position) -> str:
        return self.text[position_to_offset(self.text, start):position_to_offset(self.text, end)]


@dataclass
class TextEvent:
    """In-memory TransferEventPort carrying a plain-text payload."""

    text: str
    default_prevented: bool = False
    propagation_stopped: bool = False
    data: dict[str, str] = field(default_factory=dict)

    def get_data(self, mime_type: str) -> str:
        if mime_type == "text/plain":
            return self.text
        return self.data.get(mime_type, "")

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class StaticClipboard:
    def __init__(self, text: str = "") -> None:
        self.text = text

    async def read_text(self) -> str:
        return self.text


class LogNotifier:
    """NotifierPort that writes notices to the log (CLI / headless hosts)."""

    def __init__(self) -> None:
        self._log = logging.getLogger("notice")

    def notify(self, message: str) -> None:
        self._log.warning("%s", message)
