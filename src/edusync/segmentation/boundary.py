"""Word-boundary token search used to re-derive exact unit boundaries."""

from __future__ import annotations

import re

# Anything that is not a word character (letters incl. CJK, digits, underscore) or whitespace.
_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")


def extract_words(text: str) -> str:
    """Reduce text to its word characters, single-space separated."""
    return _WHITESPACE.sub(" ", _NON_WORD.sub(" ", text)).strip()


def first_token(text: str) -> str:
    """First whitespace-delimited word token of ``text``, or "" if it has none."""
    words = extract_words(text)
    return words.split(" ", 1)[0] if words else ""


def find_token(haystack: str, token: str, cursor: int = 0) -> int | None:
    """Offset of the first occurrence of ``token`` at or after ``cursor``.

    The occurrence must start a word: the character before it (within the
    searched region) may not be a word character, and the token must not run
    on into a longer word. Matching is literal and case-insensitive.
    """
    if not token:
        return None
    pattern = re.compile(rf"(?<!\w){re.escape(token)}(?!\w)", re.IGNORECASE)
    match = pattern.search(haystack[cursor:])
    if match is None:
        return None
    return cursor + match.start()
