"""Document-level spell checking facade."""

import logging
from dataclasses import dataclass, field

from linguistics.config import settings
from linguistics.services.classifier import SpellingClassifier, Verdict
from linguistics.services.dictionary.base import ProfileItemKind
from linguistics.services.dictionary.registry import DictionaryRegistry
from linguistics.services.ignore import IgnoreRuleEngine
from linguistics.services.scanner import Token, WordScanner

logger = logging.getLogger(__name__)


@dataclass
class Misspelling:
    """A word flagged as misspelled."""

    word: str
    line: int  # 1-based
    column: int  # 1-based
    before: str = ""
    suggestions: list[str] = field(default_factory=list)


class SpellChecker:
    """
    Spell check whole documents.

    Text is scanned one line at a time, the same way an editor hands lines to a
    highlighting overlay. The active mode and the document snapshot are passed
    on to the ignore lists.
    """

    def __init__(
        self,
        registry: DictionaryRegistry | None = None,
        ignore_rules: IgnoreRuleEngine | None = None,
        classifier: SpellingClassifier | None = None,
        enabled: bool | None = None,
    ) -> None:
        self.registry = registry or DictionaryRegistry()
        self.ignore_rules = ignore_rules or IgnoreRuleEngine()
        self.ignore_rules.add_words(settings.global_ignore_list)
        self.classifier = classifier or SpellingClassifier(self.registry, self.ignore_rules)
        self.scanner = WordScanner()
        self.enabled = settings.spell_check_enabled if enabled is None else enabled
        self._activated_rules: list[str] = []

    @property
    def locale(self) -> str:
        return self.classifier.locale

    @property
    def initialized(self) -> bool:
        return self.classifier.initialized

    async def initialize(self) -> None:
        """Load ignore lists, user profiles and the list of installed languages."""
        await self.ignore_rules.load(self.registry.files)
        await self.registry.load_profiles()
        await self.registry.load_languages()

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def set_ignore_uppercase(self, ignore: bool) -> None:
        self.classifier.ignore_uppercase = ignore

    def set_mode(self, mode: str | None) -> None:
        self.ignore_rules.set_mode(mode)

    def set_document_contents(self, contents: str | None) -> None:
        self.ignore_rules.set_document_contents(contents)

    def set_locale(self, name: str) -> None:
        """
        Switch to a locale or profile.

        Utility and programming entries of a profile switch on the matching
        manual-only ignore lists.
        """
        for rule_name in self._activated_rules:
            self.ignore_rules.deactivate(rule_name)
        self._activated_rules = []

        profile = self.registry.get_profile(name)
        if profile is not None:
            for item in profile.items_of_kind(ProfileItemKind.UTILITY, ProfileItemKind.PROGRAMMING):
                self.ignore_rules.activate(item.name)
                self._activated_rules.append(item.name)

        self.classifier.set_locale(name)

    async def load_locale(self, name: str) -> bool:
        """Switch locale and wait until its dictionaries finish loading."""
        self.set_locale(name)
        ready = await self.registry.ensure_loaded(name)
        if not ready:
            logger.warning("No dictionary could be loaded for %s", name)
        return ready

    def classify_line(self, line: str) -> list[tuple[Token, Verdict]]:
        """
        Classify every word of one line.

        While no dictionary of the active locale is ready the line is still
        scanned to the end, but nothing is classified and the dictionaries are
        loaded in the background.
        """
        tokens = self.scanner.scan(line)
        if self.enabled and not self.classifier.initialized:
            self.classifier.request_load()
        if not self.enabled or not self.classifier.initialized:
            for _ in tokens:
                pass
            return []
        return [(token, self.classifier.classify(token.word, token.separators)) for token in tokens]

    def check_text(self, text: str, with_suggestions: bool = False) -> list[Misspelling]:
        """
        Find misspelled words in a document.

        Args:
            text: Document contents
            with_suggestions: Look up suggestions for every misspelling

        Returns:
            Misspellings in document order
        """
        self.set_document_contents(text)

        misspellings: list[Misspelling] = []
        for line_number, line in enumerate(text.splitlines(), 1):
            for token, verdict in self.classify_line(line):
                if verdict is not Verdict.INCORRECT:
                    continue
                misspellings.append(
                    Misspelling(
                        word=token.word,
                        line=line_number,
                        column=token.start + 1,
                        before=token.separators,
                        suggestions=self.suggest(token.word) if with_suggestions else [],
                    )
                )

        logger.info("Found %d misspelled words", len(misspellings))
        return misspellings

    def suggest(self, word: str) -> list[str]:
        return self.classifier.suggest(word) or []
