"""Tests for paste_id module (placeholder tokens)."""
import random

from paste_id import (
    BASE_LABEL,
    HASH_ALPHABET,
    INVISIBLE_CHAR,
    PasteIdGenerator,
    strip_invisible,
)


def test_plain_token_shape():
    token = PasteIdGenerator(stealth=False, rng=random.Random(1)).generate()
    assert token.literal_text == token.visible_text
    base, suffix = token.visible_text.split("#")
    assert base == BASE_LABEL
    assert len(suffix) == 4
    assert all(c in HASH_ALPHABET for c in suffix)


def test_seeded_generator_is_deterministic():
    a = PasteIdGenerator(stealth=True, rng=random.Random(42)).generate()
    b = PasteIdGenerator(stealth=True, rng=random.Random(42)).generate()
    assert a == b


def test_stealth_token_renders_as_visible_text():
    gen = PasteIdGenerator(stealth=True, rng=random.Random(7))
    for _ in range(50):
        token = gen.generate()
        assert strip_invisible(token.literal_text) == token.visible_text
        assert token.visible_text.startswith(BASE_LABEL + "#")


def test_stealth_padding_between_zero_and_two():
    token = PasteIdGenerator(stealth=True, rng=random.Random(3)).generate()
    literal = token.literal_text
    assert not literal.startswith(INVISIBLE_CHAR)
    runs = literal.split(INVISIBLE_CHAR * 3)
    assert len(runs) == 1
    # one run of padding after each visible character
    assert len(literal) - len(token.visible_text) <= 2 * len(token.visible_text)


def test_stealth_tokens_are_distinct():
    gen = PasteIdGenerator(stealth=True, rng=random.Random(11))
    literals = {gen.generate().literal_text for _ in range(200)}
    assert len(literals) == 200
