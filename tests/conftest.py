"""Pytest configuration and fixtures."""

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest

from linguistics.services.classifier import SpellingClassifier
from linguistics.services.dictionary.base import Lexicon
from linguistics.services.dictionary.files import DictionaryFiles
from linguistics.services.dictionary.registry import DictionaryRegistry
from linguistics.services.ignore import IgnoreRuleEngine

ENGLISH_WORDS = [
    "a",
    "bar",
    "brown",
    "dog",
    "foo",
    "fox",
    "hello",
    "is",
    "joneses",
    "jumps",
    "lazy",
    "over",
    "php",
    "quick",
    "spell",
    "test",
    "the",
    "this",
    "world",
]

GERMAN_WORDS = ["hallo", "haus", "und", "welt"]


class FakeLexicon(Lexicon):
    """Set based lexicon that mimics Hunspell's capitalization handling."""

    def __init__(self, locale: str, words: list[str]) -> None:
        self._locale = locale
        self.words = set(words)

    @classmethod
    def from_data(cls, locale: str, affix_data: bytes, word_list_data: bytes) -> "FakeLexicon":
        lines = word_list_data.decode("utf-8").splitlines()
        if lines and lines[0].strip().isdigit():
            lines = lines[1:]
        return cls(locale, [line.split("/")[0].strip() for line in lines if line.strip()])

    @property
    def locale(self) -> str:
        return self._locale

    def check(self, word: str) -> bool:
        if word in self.words:
            return True
        # Capitalized forms of lower-case entries are accepted
        return word == word.capitalize() and word.lower() in self.words

    def suggest(self, word: str) -> list[str]:
        first = word[:1].lower()
        return sorted(
            w for w in self.words if w[:1] == first and abs(len(w) - len(word)) <= 1 and w != word
        )


def fake_lexicon_factory(locale: str, affix_data: bytes, word_list_data: bytes) -> Lexicon:
    return FakeLexicon.from_data(locale, affix_data, word_list_data)


def write_dictionary(root: Path, locale: str, words: list[str], name: str | None = None) -> Path:
    """Install a dictionary below a dictionary root."""
    directory = root / "natural-languages" / locale
    directory.mkdir(parents=True, exist_ok=True)
    (directory / f"{locale}.aff").write_text("SET UTF-8\n", encoding="utf-8")
    (directory / f"{locale}.dic").write_text(
        f"{len(words)}\n" + "\n".join(words) + "\n", encoding="utf-8"
    )
    (directory / "language.json").write_text(
        json.dumps({"locale": locale, "name": name or locale}), encoding="utf-8"
    )
    return directory


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


async def drain(registry: DictionaryRegistry) -> None:
    """Wait for every background task of the registry, including ones spawned meanwhile."""
    while registry._tasks:
        await asyncio.gather(*list(registry._tasks))


@pytest.fixture
def dictionary_root(tmp_path: Path) -> Path:
    """Create a dictionary tree with two languages, a profile and ignore lists."""
    root = tmp_path / "dictionaries"
    write_dictionary(root, "en_US", ENGLISH_WORDS, name="English (United States)")
    write_dictionary(root, "de_DE", GERMAN_WORDS, name="Deutsch")

    write_json(
        root / "user-profiles" / "bilingual.json",
        {
            "profile": "bilingual",
            "items": [
                {"name": "en_US"},
                {"name": "de_DE", "type": "dictionary"},
                {"name": "markdown", "type": "utility"},
            ],
        },
    )
    write_json(
        root / "generic-utilities" / "markdown.json",
        {
            "ignore": ["toc", "frontmatter"],
            "ignoreMode": ["Mode.markdown"],
            "mustBeManuallyLoaded": True,
        },
    )
    write_json(root / "generic-utilities" / "names.json", {"ignore": ["Guido", "Linus"]})
    write_json(
        root / "programming-languages" / "python.json",
        {"ignore": ["def", "elif", "kwargs"], "ignoreMode": ["Mode.python"]},
    )
    write_json(
        root / "programming-languages" / "php.json",
        {
            "ignore": ["isset", "foreach"],
            "ignoreMode": ["Mode.all"],
            "ignoreWhenDocumentContains": ["<?php"],
        },
    )
    write_json(
        root / "programming-languages" / "latex.json",
        {"ignore": ["usepackage", "textbf"], "ignoreAfter": "\\"},
    )
    return root


@pytest.fixture
def files(dictionary_root: Path) -> DictionaryFiles:
    return DictionaryFiles(dictionary_root)


@pytest.fixture
def registry(files: DictionaryFiles) -> DictionaryRegistry:
    """Create a registry that builds fake lexicons from the dictionary tree."""
    return DictionaryRegistry(
        files=files,
        lexicon_factory=fake_lexicon_factory,
        default_locale="en_US",
        allow_affix_failures=False,
    )


@pytest.fixture
async def loaded_registry(registry: DictionaryRegistry) -> DictionaryRegistry:
    """Registry with en_US ready."""
    assert await registry.ensure_loaded("en_US")
    return registry


@pytest.fixture
def ignore_rules() -> IgnoreRuleEngine:
    return IgnoreRuleEngine()


@pytest.fixture
def classifier(
    loaded_registry: DictionaryRegistry, ignore_rules: IgnoreRuleEngine
) -> SpellingClassifier:
    """Classifier with every heuristic enabled."""
    return SpellingClassifier(
        loaded_registry,
        ignore_rules,
        locale="en_US",
        ignore_uppercase=True,
        detect_quotes=True,
        detect_camel_case=True,
    )
