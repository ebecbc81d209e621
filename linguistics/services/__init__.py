"""Services for scanning, classifying and ignoring words."""

from linguistics.services.checker import Misspelling, SpellChecker
from linguistics.services.classifier import SpellingClassifier, Verdict
from linguistics.services.ignore import IgnoreRule, IgnoreRuleEngine
from linguistics.services.scanner import Token, WordScanner

__all__ = [
    "SpellChecker",
    "Misspelling",
    "SpellingClassifier",
    "Verdict",
    "IgnoreRule",
    "IgnoreRuleEngine",
    "Token",
    "WordScanner",
]
