"""Base classes and dataclasses for the dictionary registry."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Lexicon(ABC):
    """Abstract word checker for a single locale."""

    @property
    @abstractmethod
    def locale(self) -> str:
        """Return the locale this lexicon was built for."""
        ...  # pragma: no cover

    @abstractmethod
    def check(self, word: str) -> bool:
        """
        Check whether a word is spelled correctly.

        Args:
            word: The word to check

        Returns:
            True if the dictionary accepts the word
        """
        ...  # pragma: no cover

    @abstractmethod
    def suggest(self, word: str) -> list[str]:
        """
        Suggest corrections for a word.

        Args:
            word: The misspelled word

        Returns:
            Candidate spellings, best first
        """
        ...  # pragma: no cover


# (locale, affix_data, word_list_data) -> Lexicon
LexiconFactory = Callable[[str, bytes, bytes], Lexicon]


class LexiconState(str, Enum):
    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass
class LexiconEntry:
    """Registry record for one locale's dictionary."""

    locale: str
    state: LexiconState = LexiconState.UNLOADED
    affix_data: bytes | None = None
    word_list_data: bytes | None = None
    lexicon: Lexicon | None = None
    pending_halves: int = 2  # join counter for the affix and word list reads
    failed_halves: list[str] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        return self.state is LexiconState.READY and self.lexicon is not None


class ProfileItemKind(str, Enum):
    DICTIONARY = "dictionary"
    UTILITY = "utility"
    PROGRAMMING = "programming"


@dataclass(frozen=True)
class ProfileItem:
    name: str
    kind: ProfileItemKind = ProfileItemKind.DICTIONARY


@dataclass(frozen=True)
class Profile:
    """A named, ordered list of dictionaries and ignore lists used as one language."""

    name: str
    items: tuple[ProfileItem, ...]

    @property
    def dictionary_names(self) -> list[str]:
        return [item.name for item in self.items if item.kind is ProfileItemKind.DICTIONARY]

    def items_of_kind(self, *kinds: ProfileItemKind) -> list[ProfileItem]:
        return [item for item in self.items if item.kind in kinds]


@dataclass(frozen=True)
class LanguageInfo:
    """Metadata from an installed language's language.json file."""

    locale: str
    name: str
    extra: dict[str, Any] = field(default_factory=dict, compare=False)
    is_profile: bool = False


@dataclass(frozen=True)
class BareLocale:
    locale: str


@dataclass(frozen=True)
class NamedProfile:
    profile: Profile


LocaleRef = BareLocale | NamedProfile
