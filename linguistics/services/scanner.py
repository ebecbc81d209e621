"""Incremental word scanner that splits a character stream into words."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from linguistics.services.text import is_word_separator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Token:
    """A scanned word and the separator run that came right before it."""

    word: str
    separators: str
    start: int  # offset of the first character of the word in the stream

    @property
    def end(self) -> int:
        return self.start + len(self.word)


class WordScanner:
    """
    Split a character stream into words, one character at a time.

    Separator characters are collected into a run that is handed out with the
    next word as its "before context". The run is marked dirty as soon as a
    word is emitted and is cleared on the next step, so each run belongs to
    exactly one token. Scanning never backtracks and the scanner state is reset
    at the start of every ``scan`` call.
    """

    def __init__(self) -> None:
        self._separator_run = ""
        self._dirty = True
        self._word = ""

    @property
    def separator_run(self) -> str:
        """Separators seen since the last emitted word."""
        return self._separator_run

    def reset(self) -> None:
        self._separator_run = ""
        self._dirty = True
        self._word = ""

    def scan(self, stream: Iterable[str]) -> Iterator[Token]:
        """
        Lazily yield tokens from a stream of characters.

        Args:
            stream: Any iterable of single characters, usually a string

        Yields:
            Token for every maximal run of word characters
        """
        self.reset()
        start = 0

        for offset, char in enumerate(stream):
            separator = is_word_separator(char)
            if separator and self._word:
                yield self._emit(start)

            if self._dirty:
                self._separator_run = ""
                self._dirty = False

            if separator:
                self._separator_run += char
                continue

            if not self._word:
                start = offset
            self._word += char

        if self._word:
            yield self._emit(start)

    def _emit(self, start: int) -> Token:
        token = Token(word=self._word, separators=self._separator_run, start=start)
        self._word = ""
        self._dirty = True
        return token
