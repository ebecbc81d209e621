"""Locate and read dictionary, profile and ignore list files."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from linguistics.config import settings
from linguistics.errors import (
    DictionaryNotFoundError,
    MalformedFileError,
    MalformedLanguageError,
    MalformedProfileError,
)
from linguistics.services.dictionary.base import (
    LanguageInfo,
    Profile,
    ProfileItem,
    ProfileItemKind,
)
from linguistics.services.ignore import IgnoreRule, parse_ignore_rule

logger = logging.getLogger(__name__)

AFFIX_EXTENSION = ".aff"
DICTIONARY_EXTENSION = ".dic"
LANGUAGE_FILE = "language.json"


def parse_profile(data: Any, source: str) -> Profile:
    """
    Build a Profile from a decoded user profile file.

    Items without a "type" are dictionaries. A profile without items is useless
    and is rejected.
    """
    if not isinstance(data, dict):
        raise MalformedProfileError(source, "expected a JSON object")

    name = data.get("profile")
    if not isinstance(name, str) or not name:
        raise MalformedProfileError(source, "missing 'profile' name")

    raw_items = data.get("items")
    if not isinstance(raw_items, list) or not raw_items:
        raise MalformedProfileError(source, "profile has no items")

    items: list[ProfileItem] = []
    for raw in raw_items:
        if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
            raise MalformedProfileError(source, f"invalid item {raw!r}")
        try:
            kind = ProfileItemKind(raw.get("type", ProfileItemKind.DICTIONARY.value))
        except ValueError:
            raise MalformedProfileError(source, f"unknown item type {raw.get('type')!r}") from None
        items.append(ProfileItem(name=raw["name"], kind=kind))

    return Profile(name=name, items=tuple(items))


def parse_language(data: Any, source: str) -> LanguageInfo:
    """Build a LanguageInfo from a decoded language.json file."""
    if not isinstance(data, dict):
        raise MalformedLanguageError(source, "expected a JSON object")

    locale = data.get("locale")
    if not isinstance(locale, str) or not locale:
        raise MalformedLanguageError(source, "missing 'locale'")

    name = data.get("name")
    extra = {k: v for k, v in data.items() if k not in ("locale", "name")}
    return LanguageInfo(locale=locale, name=name if isinstance(name, str) else locale, extra=extra)


class DictionaryFiles:
    """
    File system access for everything the spell checker loads.

    Layout below the root directory::

        natural-languages/<locale>/<locale>.aff
        natural-languages/<locale>/<locale>.dic
        natural-languages/<locale>/language.json
        user-profiles/*.json
        generic-utilities/*.json
        programming-languages/*.json

    All reads run in the default thread executor so the event loop never blocks.
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = Path(root) if root is not None else settings.dictionary_dir

    @property
    def natural_languages_dir(self) -> Path:
        return self.root / "natural-languages"

    @property
    def user_profiles_dir(self) -> Path:
        return self.root / "user-profiles"

    @property
    def programming_languages_dir(self) -> Path:
        return self.root / "programming-languages"

    @property
    def generic_utilities_dir(self) -> Path:
        return self.root / "generic-utilities"

    def _dictionary_file(self, locale: str, extension: str) -> Path:
        return self.natural_languages_dir / locale / f"{locale}{extension}"

    def affix_path(self, locale: str) -> Path:
        return self._dictionary_file(locale, AFFIX_EXTENSION)

    def word_list_path(self, locale: str) -> Path:
        return self._dictionary_file(locale, DICTIONARY_EXTENSION)

    def has_dictionary_files(self, locale: str) -> bool:
        return self.affix_path(locale).is_file() and self.word_list_path(locale).is_file()

    async def read_bytes(self, path: Path) -> bytes:
        """Read a file's raw contents."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, path.read_bytes)

    async def read_dictionary_file(self, locale: str, path: Path) -> bytes:
        """
        Read one half of a dictionary.

        Raises:
            DictionaryNotFoundError: If the file is not installed
        """
        try:
            return await self.read_bytes(path)
        except FileNotFoundError as e:
            raise DictionaryNotFoundError(locale) from e

    async def read_json(self, path: Path) -> Any:
        """Read and decode a UTF-8 JSON file."""
        raw = await self.read_bytes(path)
        try:
            return json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedFileError(str(path), str(e)) from e

    async def dictionary_exists(self, locale: str) -> bool:
        """Check that both the affix and dictionary files exist."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.has_dictionary_files, locale)

    def _json_files(self, directory: Path) -> list[Path]:
        if not directory.is_dir():
            return []
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == ".json")

    async def _read_all_json(self, paths: list[Path]) -> list[tuple[Path, Any]]:
        """Read JSON files in parallel, skipping unreadable ones."""
        results = await asyncio.gather(*(self.read_json(p) for p in paths), return_exceptions=True)

        decoded: list[tuple[Path, Any]] = []
        for path, result in zip(paths, results):
            if isinstance(result, BaseException):
                logger.warning("Skipping %s: %s", path, result)
                continue
            decoded.append((path, result))
        return decoded

    async def find_languages(self) -> dict[str, LanguageInfo]:
        """Discover installed natural languages by their language.json files."""
        base = self.natural_languages_dir
        candidates = (
            sorted(d / LANGUAGE_FILE for d in base.iterdir() if d.is_dir()) if base.is_dir() else []
        )
        existing = [p for p in candidates if p.is_file()]

        languages: dict[str, LanguageInfo] = {}
        for path, data in await self._read_all_json(existing):
            try:
                language = parse_language(data, str(path))
            except MalformedLanguageError as e:
                logger.warning("Skipping %s", e)
                continue
            languages[language.locale] = language

        logger.info("Found %d installed languages", len(languages))
        return languages

    async def find_profiles(self) -> dict[str, Profile]:
        """Load every user profile, keyed by profile name."""
        profiles: dict[str, Profile] = {}
        for path, data in await self._read_all_json(self._json_files(self.user_profiles_dir)):
            try:
                profile = parse_profile(data, str(path))
            except MalformedProfileError as e:
                logger.warning("Skipping %s", e)
                continue
            profiles[profile.name] = profile

        logger.info("Found %d user profiles", len(profiles))
        return profiles

    async def find_ignore_rules(self) -> list[IgnoreRule]:
        """Load ignore lists from the generic utilities and programming languages folders."""
        paths = self._json_files(self.generic_utilities_dir) + self._json_files(
            self.programming_languages_dir
        )

        rules: list[IgnoreRule] = []
        for path, data in await self._read_all_json(paths):
            try:
                rules.append(parse_ignore_rule(data, path.stem))
            except MalformedFileError as e:
                logger.warning("Skipping %s", e)
        return rules
