"""
Placeholder text inserted while a title is being fetched, found again later by substring search.
"""
import random
from dataclasses import dataclass

BASE_LABEL = "Fetching Title"
HASH_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
HASH_LENGTH = 4
INVISIBLE_CHAR = "\u200b"
MAX_INVISIBLE_CHARS = 2


@dataclass(frozen=True)
class PlaceholderToken:
    visible_text: str
    literal_text: str


def block_hash(rng: random.Random, length: int = HASH_LENGTH) -> str:
    return "".join(rng.choice(HASH_ALPHABET) for _ in range(length))


def strip_invisible(text: str) -> str:
    return text.replace(INVISIBLE_CHAR, "")


class PasteIdGenerator:
    """
    Builds "Fetching Title#ab12". In stealth mode every character is followed by
    0-2 zero-width spaces, so the text renders the same but rarely collides with typed text.
    """

    def __init__(self, stealth: bool = False, rng: random.Random | None = None, base: str = BASE_LABEL) -> None:
        self.stealth = stealth
        self.rng = rng or random.Random()
        self.base = base

    def _pad(self, text: str) -> str:
        return "".join(
            c + INVISIBLE_CHAR * self.rng.randint(0, MAX_INVISIBLE_CHARS) for c in text
        )

    def generate(self) -> PlaceholderToken:
        visible = f"{self.base}#{block_hash(self.rng)}"
        literal = self._pad(visible) if self.stealth else visible
        return PlaceholderToken(visible_text=visible, literal_text=literal)
