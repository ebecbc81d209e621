"""Dictionary registry, lexicon backends and dictionary file discovery."""

from linguistics.services.dictionary.base import (
    BareLocale,
    LanguageInfo,
    Lexicon,
    LexiconEntry,
    LexiconFactory,
    LexiconState,
    LocaleRef,
    NamedProfile,
    Profile,
    ProfileItem,
    ProfileItemKind,
)
from linguistics.services.dictionary.files import DictionaryFiles
from linguistics.services.dictionary.registry import DictionaryRegistry

__all__ = [
    "BareLocale",
    "DictionaryFiles",
    "DictionaryRegistry",
    "LanguageInfo",
    "Lexicon",
    "LexiconEntry",
    "LexiconFactory",
    "LexiconState",
    "LocaleRef",
    "NamedProfile",
    "Profile",
    "ProfileItem",
    "ProfileItemKind",
]
