"""Hunspell lexicon backed by the spylls pure-Python implementation."""

import logging
import tempfile
from itertools import islice
from pathlib import Path

from spylls.hunspell import Dictionary

from linguistics.services.dictionary.base import Lexicon

logger = logging.getLogger(__name__)


def build_dictionary(locale: str, affix_data: bytes, word_list_data: bytes) -> Dictionary:
    """
    Build a spylls Dictionary from raw .aff and .dic contents.

    spylls reads dictionaries from disk and handles the SET encoding directive
    itself, so the raw bytes are written unchanged to a scratch directory.
    """
    with tempfile.TemporaryDirectory(prefix="linguistics-") as tmp:
        base = Path(tmp) / locale
        Path(f"{base}.aff").write_bytes(affix_data)
        Path(f"{base}.dic").write_bytes(word_list_data)
        return Dictionary.from_files(str(base))


class HunspellLexicon(Lexicon):
    """Lexicon for one locale using Hunspell affix rules."""

    def __init__(
        self,
        locale: str,
        affix_data: bytes,
        word_list_data: bytes,
        max_suggestions: int | None = None,
    ) -> None:
        self._locale = locale
        self.max_suggestions = max_suggestions
        logger.info("Building Hunspell dictionary for %s", locale)
        self._dictionary = build_dictionary(locale, affix_data, word_list_data)

    @property
    def locale(self) -> str:
        return self._locale

    def check(self, word: str) -> bool:
        if not word:
            return False
        return bool(self._dictionary.lookup(word))

    def suggest(self, word: str) -> list[str]:
        suggestions = self._dictionary.suggest(word)
        if self.max_suggestions is not None:
            suggestions = islice(suggestions, self.max_suggestions)
        return list(suggestions)
