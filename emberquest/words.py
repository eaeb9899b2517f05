"""Small string helpers used by the configuration readers."""

from __future__ import annotations


def split_words(text: str, separators: str) -> list[str]:
    """Split ``text`` on any character of ``separators``, dropping empty words.

    A NUL character always ends a word, like any listed separator.
    """
    stops = set(separators) | {"\0"}
    words: list[str] = []
    current: list[str] = []
    for char in text:
        if char in stops:
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        words.append("".join(current))
    return words


def concat_reversed(dest: str, src: str) -> str:
    """Return ``src`` followed by ``dest``."""
    return src + dest