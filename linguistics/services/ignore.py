"""Ignore lists that suppress false positives based on context."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from linguistics.errors import MalformedIgnoreRuleError

if TYPE_CHECKING:
    from linguistics.services.dictionary.files import DictionaryFiles

logger = logging.getLogger(__name__)

ALL_MODES = "Mode.all"


@dataclass(frozen=True)
class IgnoreRule:
    """One parsed ignore list file."""

    name: str
    ignore: frozenset[str]
    ignore_after: str | None = None
    ignore_mode: tuple[str, ...] = ()
    ignore_when_document_contains: tuple[str, ...] = ()
    must_be_manually_loaded: bool = False

    @property
    def is_conditional(self) -> bool:
        return bool(self.ignore_after or self.ignore_mode or self.ignore_when_document_contains)


def _string_list(data: dict[str, Any], key: str, source: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise MalformedIgnoreRuleError(source, f"'{key}' must be a list of strings")
    return tuple(value)


def parse_ignore_rule(data: Any, name: str) -> IgnoreRule:
    """
    Build an IgnoreRule from a decoded ignore list file.

    Args:
        data: Decoded JSON object
        name: Rule name, usually the file name without extension

    Raises:
        MalformedIgnoreRuleError: If "ignore" is missing or a field has the wrong type
    """
    if not isinstance(data, dict):
        raise MalformedIgnoreRuleError(name, "expected a JSON object")
    if "ignore" not in data:
        raise MalformedIgnoreRuleError(name, "missing 'ignore' list")

    ignore_after = data.get("ignoreAfter")
    if ignore_after is not None and not isinstance(ignore_after, str):
        raise MalformedIgnoreRuleError(name, "'ignoreAfter' must be a string")

    manual = data.get("mustBeManuallyLoaded", False)
    if not isinstance(manual, bool):
        raise MalformedIgnoreRuleError(name, "'mustBeManuallyLoaded' must be a boolean")

    return IgnoreRule(
        name=name,
        ignore=frozenset(_string_list(data, "ignore", name)),
        ignore_after=ignore_after or None,
        ignore_mode=_string_list(data, "ignoreMode", name),
        ignore_when_document_contains=_string_list(data, "ignoreWhenDocumentContains", name),
        must_be_manually_loaded=manual,
    )


@dataclass
class IgnoreRuleEngine:
    """
    Decide whether a flagged word should be left alone.

    Unconditional rules are merged into one always-ignored set when they are
    added. Conditional rules are kept in load order and evaluated per word
    against the text before the word, the active mode and the document.
    """

    mode: str = ALL_MODES
    document: str | None = None
    always_ignore: set[str] = field(default_factory=set)
    conditional_rules: list[IgnoreRule] = field(default_factory=list)
    activated: set[str] = field(default_factory=set)

    def set_mode(self, mode: str | None) -> None:
        self.mode = mode or ALL_MODES

    def set_document_contents(self, contents: str | None) -> None:
        self.document = contents

    def add_words(self, words: Iterable[str]) -> None:
        """Always ignore the given words."""
        self.always_ignore.update(words)

    def add_rule(self, rule: IgnoreRule) -> None:
        if rule.is_conditional:
            self.conditional_rules.append(rule)
        else:
            self.always_ignore.update(rule.ignore)
        logger.debug(
            "Added %s ignore list %s (%d words)",
            "conditional" if rule.is_conditional else "unconditional",
            rule.name,
            len(rule.ignore),
        )

    def add_rules(self, rules: Iterable[IgnoreRule]) -> None:
        for rule in rules:
            self.add_rule(rule)

    def activate(self, name: str) -> None:
        """Enable a rule that is marked as manual-only."""
        self.activated.add(name)

    def deactivate(self, name: str) -> None:
        self.activated.discard(name)

    async def load(self, files: "DictionaryFiles") -> int:
        """Load every ignore list file the file collaborator can find."""
        rules = await files.find_ignore_rules()
        self.add_rules(rules)
        logger.info("Loaded %d ignore lists", len(rules))
        return len(rules)

    def _mode_matches(self, rule: IgnoreRule) -> bool:
        return ALL_MODES in rule.ignore_mode or self.mode in rule.ignore_mode

    def _is_manual_only(self, rule: IgnoreRule) -> bool:
        return rule.must_be_manually_loaded and rule.name not in self.activated

    def _ignored_after(self, rule: IgnoreRule, word: str, before_context: str) -> bool:
        return bool(rule.ignore_after) and rule.ignore_after == before_context and word in rule.ignore

    def _ignored_by_document(self, rule: IgnoreRule, word: str) -> bool:
        if not rule.ignore_when_document_contains or self.document is None:
            return False
        if word not in rule.ignore:
            return False
        return any(needle in self.document for needle in rule.ignore_when_document_contains)

    def _rule_matches(self, rule: IgnoreRule, word: str, before_context: str) -> bool:
        if self._ignored_after(rule, word, before_context):
            return True

        if not rule.ignore_mode or not self._mode_matches(rule) or self._is_manual_only(rule):
            return False

        if self._ignored_by_document(rule, word):
            return True

        # Mode-only rules
        if not rule.ignore_after and not rule.ignore_when_document_contains:
            return word in rule.ignore

        return False

    def should_ignore(self, word: str, before_context: str | None) -> bool:
        """
        Determine if a word should be ignored.

        Args:
            word: The word to check
            before_context: The separators that came right before the word

        Returns:
            True if any ignore list covers the word in this context
        """
        if word in self.always_ignore:
            return True

        if not before_context:
            return False

        return any(self._rule_matches(rule, word, before_context) for rule in self.conditional_rules)
