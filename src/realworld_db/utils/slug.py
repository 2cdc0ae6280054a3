# src/realworld_db/utils/slug.py
"""Slug derivation for article titles."""

from __future__ import annotations

_QUOTE_CHARS = "'\""


def _split_words(title: str) -> list[str]:
    words: list[str] = []
    current: list[str] = []
    for char in title:
        if char.isalnum() or char in _QUOTE_CHARS:
            current.append(char)
        elif current:
            words.append("".join(current))
            current = []
    if current:
        words.append("".join(current))
    return words


def slugify(title: str) -> str:
    """Return the URL slug for ``title``.

    Words are runs of letters, digits and quotes; quotes are then dropped so
    contractions and possessives stay in one word ("It's" -> "its"). Only
    ASCII letters are lowercased.

    >>> slugify("Why are DB Admins Always Shouting?")
    'why-are-db-admins-always-shouting'
    """
    words = []
    for word in _split_words(title):
        word = word.translate({ord(q): None for q in _QUOTE_CHARS})
        words.append("".join(c.lower() if c.isascii() else c for c in word))
    return "-".join(words)
