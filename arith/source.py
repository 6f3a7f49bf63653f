"""
Character sources for the lexer.

A source hands out characters one at a time and lets the caller look at the
next character without consuming it. It keeps no position information;
row/column tracking is the lexer's job.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional


class CharacterSource(ABC):
    """Forward-only character supplier with one character of lookahead."""

    @abstractmethod
    def next(self) -> Optional[str]:
        """Consumes and returns the next character, or None at end of input."""
        pass

    @abstractmethod
    def peek(self) -> Optional[str]:
        """Returns the next character without consuming it, or None at end of input."""
        pass


class IterableSource(CharacterSource):
    """
    Source over any finite iterable of characters.

    Items are pulled lazily; an item longer than one character (e.g. a line
    from a file object) is split into its characters.
    """

    def __init__(self, chars: Iterable[str]):
        self._chars: Iterator[str] = (c for chunk in chars for c in chunk)
        self._lookahead: Optional[str] = None
        self._has_lookahead = False

    def next(self) -> Optional[str]:
        if self._has_lookahead:
            self._has_lookahead = False
            return self._lookahead
        return next(self._chars, None)

    def peek(self) -> Optional[str]:
        if not self._has_lookahead:
            self._lookahead = next(self._chars, None)
            self._has_lookahead = True
        return self._lookahead


class StringSource(CharacterSource):
    """Source over an in-memory string."""

    def __init__(self, text: str):
        self._text = text
        self._index = 0

    @classmethod
    def from_str(cls, text: str) -> "StringSource":
        return cls(text)

    def next(self) -> Optional[str]:
        if self._index >= len(self._text):
            return None
        char = self._text[self._index]
        self._index += 1
        return char

    def peek(self) -> Optional[str]:
        if self._index >= len(self._text):
            return None
        return self._text[self._index]


__all__ = ["CharacterSource", "IterableSource", "StringSource"]
