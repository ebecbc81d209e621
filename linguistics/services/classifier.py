"""Heuristic spelling classification on top of the dictionary registry."""

import logging
from enum import Enum
from typing import Any

from linguistics.config import settings
from linguistics.services.dictionary.registry import DictionaryRegistry
from linguistics.services.events import DictionaryEvent
from linguistics.services.ignore import IgnoreRuleEngine
from linguistics.services.text import (
    is_camel_case,
    split_by_upper_case,
    starts_with_number,
    trim_char,
)

logger = logging.getLogger(__name__)


class Verdict(str, Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    INDETERMINATE = "indeterminate"  # no dictionary ready yet

    @classmethod
    def from_check(cls, result: bool | None) -> "Verdict":
        if result is None:
            return cls.INDETERMINATE
        return cls.CORRECT if result else cls.INCORRECT


class SpellingClassifier:
    """
    Decide whether a word is spelled correctly.

    Cheap heuristics run first so the dictionary is only consulted when it is
    actually needed: common programming terms, numbers, acronyms and
    possessives, quoted words and camelCased identifiers. Words flagged as
    incorrect are then given to the ignore lists.

    The classifier only knows the name of the locale or profile it checks
    against and resolves it through the registry on every lookup. Until a
    dictionary behind that name is ready every lookup is indeterminate and
    requests a background load, which keeps documents from filling up with
    false positives while loading.
    """

    # Very common programming keywords that shouldn't need a dictionary entry
    COMMON_TERMS = frozenset({"foreach", "json", "aff", "dic", "url", "src"})

    QUOTE_CHARACTERS = ("'", '"')

    # Registry events that can change whether the active dictionaries are ready
    GATE_EVENTS = (
        DictionaryEvent.DICTIONARY_LOADED,
        DictionaryEvent.DICTIONARY_UNLOADED,
        DictionaryEvent.DICTIONARIES_UNLOADED,
        DictionaryEvent.USER_PROFILES_LOADED,
    )

    def __init__(
        self,
        registry: DictionaryRegistry,
        ignore_rules: IgnoreRuleEngine | None = None,
        locale: str | None = None,
        ignore_uppercase: bool | None = None,
        detect_quotes: bool | None = None,
        detect_camel_case: bool | None = None,
    ) -> None:
        self.registry = registry
        self.ignore_rules = ignore_rules or IgnoreRuleEngine()
        self._locale = locale or registry.default_locale
        self.ignore_uppercase = (
            settings.spelling_ignore_uppercase if ignore_uppercase is None else ignore_uppercase
        )
        self.detect_quotes = settings.detect_quoted_words if detect_quotes is None else detect_quotes
        self.detect_camel_case = (
            settings.detect_camel_case_words if detect_camel_case is None else detect_camel_case
        )

        self._initialized = registry.is_ready(self._locale)
        for event in self.GATE_EVENTS:
            registry.on(event, self._refresh)

    @property
    def locale(self) -> str:
        return self._locale

    @locale.setter
    def locale(self, locale: str) -> None:
        self._locale = locale
        self._refresh()

    @property
    def initialized(self) -> bool:
        """True once a dictionary behind the active locale or profile is ready."""
        return self._initialized

    def _refresh(self, *args: Any) -> None:
        self._initialized = self.registry.is_ready(self._locale)

    def detach(self) -> None:
        """Stop following registry events."""
        for event in self.GATE_EVENTS:
            self.registry.off(event, self._refresh)

    def set_locale(self, locale: str) -> None:
        """Switch the target locale or profile and start loading its dictionaries."""
        self.locale = locale
        self.registry.default_locale = locale
        # The registry never loads the same dictionary twice
        self.registry.load(locale)

    def request_load(self) -> None:
        """Load the active dictionaries in the background, skipping ones that failed."""
        self.registry.load(self._locale, retry_failed=False)

    def suggest(self, word: str) -> list[str] | None:
        return self.registry.suggest(word, self.locale)

    def is_common_term(self, word: str) -> bool:
        return word in self.COMMON_TERMS

    def _check(self, word: str) -> Verdict:
        if not self._initialized:
            self.request_load()
            return Verdict.INDETERMINATE
        return Verdict.from_check(self.registry.check(word, self.locale))

    def _check_camel_case(self, word: str) -> Verdict:
        """Every camelCase part must be spelled correctly."""
        verdicts = [self._check(part) for part in split_by_upper_case(word)]
        if Verdict.INCORRECT in verdicts:
            return Verdict.INCORRECT
        if Verdict.INDETERMINATE in verdicts:
            return Verdict.INDETERMINATE
        return Verdict.CORRECT

    def _check_between(self, word: str, quote: str) -> Verdict | None:
        """
        Check a word with a quote character on one or both ends.

        Only a word quoted on both ends gets camelCase treatment.

        Returns:
            A final verdict, or None when the dictionary had no opinion
        """
        if word.startswith(quote) and word.endswith(quote):
            base = trim_char(word, quote)
            if not base:
                return None
            verdict = self._check_camel_case(base) if is_camel_case(base) else self._check(base)
        elif word.endswith(quote):
            verdict = self._check(word[:-1])
        elif word.startswith(quote):
            verdict = self._check(word[1:])
        else:
            return None

        if verdict is Verdict.INDETERMINATE:
            return None
        return verdict

    def _check_quotes(self, word: str) -> Verdict | None:
        verdicts = [self._check_between(word, quote) for quote in self.QUOTE_CHARACTERS]

        if Verdict.CORRECT in verdicts:
            return Verdict.CORRECT
        if Verdict.INCORRECT in verdicts:
            return Verdict.INCORRECT
        return None

    def check_spelling(self, word: str) -> Verdict:
        """Classify a word without consulting the ignore lists."""
        if self.is_common_term(word):
            return Verdict.CORRECT

        if starts_with_number(word):
            return Verdict.CORRECT

        if self.ignore_uppercase:
            # All caps is most likely an acronym
            if word == word.upper():
                return Verdict.CORRECT

            # Plural acronyms, e.g. "URL's"
            if word.endswith("'s"):
                base = word[:-2]
                if base == base.upper():
                    return Verdict.CORRECT

            # Possessives like "Joneses'"
            if word.endswith("'") and not word.startswith("'"):
                if word[0] == word[0].upper():
                    return self._check(word[:-1])

        if self.detect_quotes:
            verdict = self._check_quotes(word)
            if verdict is not None:
                return verdict

        if self.detect_camel_case and is_camel_case(word):
            return self._check_camel_case(word)

        return self._check(word)

    def classify(self, word: str, before_context: str = "") -> Verdict:
        """
        Classify a word in context.

        Args:
            word: The word to classify
            before_context: Separator characters that came right before the word

        Returns:
            CORRECT, INCORRECT, or INDETERMINATE while no dictionary is ready
        """
        verdict = self.check_spelling(word)
        if verdict is Verdict.INCORRECT and self.ignore_rules.should_ignore(word, before_context):
            logger.debug("Ignoring '%s' after %r", word, before_context)
            return Verdict.CORRECT
        return verdict
