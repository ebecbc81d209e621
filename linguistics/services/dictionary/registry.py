"""Registry of per-locale lexicons and user profiles."""

import asyncio
import logging
from collections.abc import Coroutine
from pathlib import Path
from typing import Any

from linguistics.config import settings
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
)
from linguistics.services.dictionary.files import DictionaryFiles
from linguistics.services.events import DictionaryEvent, EventDispatcher, Listener

logger = logging.getLogger(__name__)

AFFIX_HALF = "affix"
WORD_LIST_HALF = "word list"


def hunspell_factory(locale: str, affix_data: bytes, word_list_data: bytes) -> Lexicon:
    """Default lexicon factory."""
    from linguistics.services.dictionary.hunspell_backend import HunspellLexicon

    return HunspellLexicon(
        locale, affix_data, word_list_data, max_suggestions=settings.max_suggestions
    )


class DictionaryRegistry:
    """
    Owns every loaded lexicon and every user profile.

    Dictionaries load in the background: ``load_locale`` returns immediately and
    the affix and word list files are read by two independent tasks. Whichever
    finishes last builds the lexicon, so the lexicon is created exactly once.
    Progress is reported through ``events``; a state change and its event are
    always applied in the same synchronous step.

    Profile names share the locale namespace and are resolved first.
    """

    def __init__(
        self,
        files: DictionaryFiles | None = None,
        lexicon_factory: LexiconFactory | None = None,
        events: EventDispatcher | None = None,
        default_locale: str | None = None,
        allow_affix_failures: bool | None = None,
    ) -> None:
        """
        Initialize the registry.

        Args:
            files: File collaborator. Defaults to DictionaryFiles() on settings.dictionary_dir
            lexicon_factory: Builds a Lexicon from raw data. Defaults to Hunspell via spylls
            events: Dispatcher for lifecycle notifications
            default_locale: Locale used when none is given. Defaults to settings.locale_name
            allow_affix_failures: Use empty affix data when the .aff file can't be read
        """
        self.files = files or DictionaryFiles()
        self.lexicon_factory = lexicon_factory or hunspell_factory
        self.events = events or EventDispatcher()
        self._default_locale = default_locale or settings.locale_name
        self.allow_affix_failures = (
            settings.allow_affix_failures if allow_affix_failures is None else allow_affix_failures
        )

        self._entries: dict[str, LexiconEntry] = {}
        self._waiters: dict[str, asyncio.Future[bool]] = {}
        self._failed: set[str] = set()
        self._profiles: dict[str, Profile] = {}
        self._languages: dict[str, LanguageInfo] = {}
        self._tasks: set[asyncio.Task[Any]] = set()

    # Events

    def on(self, event: DictionaryEvent, listener: Listener) -> None:
        self.events.on(event, listener)

    def off(self, event: DictionaryEvent, listener: Listener | None = None) -> None:
        self.events.off(event, listener)

    # Locale bookkeeping

    @property
    def default_locale(self) -> str:
        return self._default_locale

    @default_locale.setter
    def default_locale(self, locale: str) -> None:
        self._default_locale = locale

    def resolve(self, name: str | None = None) -> LocaleRef:
        """Resolve a name to a profile or, failing that, a bare locale."""
        name = name or self._default_locale
        profile = self._profiles.get(name)
        if profile is not None:
            return NamedProfile(profile)
        return BareLocale(name)

    def dictionary_names(self, name: str | None = None) -> list[str]:
        """Return the dictionaries behind a locale or profile name, in profile order."""
        ref = self.resolve(name)
        if isinstance(ref, NamedProfile):
            return ref.profile.dictionary_names
        return [ref.locale]

    def is_ready(self, name: str | None = None) -> bool:
        """Check if at least one dictionary behind a locale or profile name is ready."""
        return any(
            self.has_dictionary(locale, ready_only=True) for locale in self.dictionary_names(name)
        )

    def get_entry(self, locale: str) -> LexiconEntry | None:
        return self._entries.get(locale)

    def has_dictionary(self, locale: str, ready_only: bool = False) -> bool:
        """
        Check if a dictionary is known to the registry.

        Args:
            locale: The locale name
            ready_only: Only count dictionaries that finished loading
        """
        entry = self._entries.get(locale)
        if entry is None:
            return False
        return entry.is_ready if ready_only else True

    def has_dictionaries_loaded(self) -> bool:
        """Check if at least one dictionary is ready for use."""
        return any(entry.is_ready for entry in self._entries.values())

    def get_lexicon(self, locale: str) -> Lexicon | None:
        entry = self._entries.get(locale)
        if entry is None or not entry.is_ready:
            return None
        return entry.lexicon

    def is_loading(self, locale: str) -> bool:
        entry = self._entries.get(locale)
        return entry is not None and entry.state is LexiconState.LOADING

    # Loading

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def load_locale(self, locale: str | None) -> None:
        """
        Start loading the dictionary for a locale.

        Does nothing when the locale is a profile name, is already loading, or
        is already loaded. Must be called with a running event loop; completion
        is reported by DICTIONARY_LOADED or DICTIONARY_FAILED_TO_LOAD.
        """
        if not locale or locale in self._entries or self.has_profile(locale):
            logger.debug("Bailing out early on load dictionary check for %s", locale)
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Cannot load dictionary %s without a running event loop", locale)
            return

        entry = LexiconEntry(locale=locale, state=LexiconState.LOADING)
        self._entries[locale] = entry
        self._waiters[locale] = loop.create_future()
        self._failed.discard(locale)

        logger.info("Loading dictionary %s", locale)
        self._spawn(self._read_half(entry, AFFIX_HALF, self.files.affix_path(locale)))
        self._spawn(self._read_half(entry, WORD_LIST_HALF, self.files.word_list_path(locale)))

    def load(self, name: str | None = None, retry_failed: bool = True) -> None:
        """
        Start loading a locale, or every dictionary of a profile.

        Args:
            name: Locale or profile name. Defaults to the default locale
            retry_failed: Also retry dictionaries that failed before
        """
        for locale in self.dictionary_names(name):
            if retry_failed or locale not in self._failed:
                self.load_locale(locale)

    async def _read_half(self, entry: LexiconEntry, half: str, path: Path) -> None:
        data: bytes | None
        try:
            data = await self.files.read_dictionary_file(entry.locale, path)
        except Exception as e:
            logger.error("Can't load the %s data for %s: %s", half, entry.locale, e)
            if half == AFFIX_HALF and self.allow_affix_failures:
                logger.warning("Using empty affix data for %s", entry.locale)
                data = b""
            else:
                data = None
        self._complete_half(entry, half, data)

    def _is_current(self, entry: LexiconEntry) -> bool:
        return self._entries.get(entry.locale) is entry

    def _complete_half(self, entry: LexiconEntry, half: str, data: bytes | None) -> None:
        if not self._is_current(entry):
            logger.debug("Discarding %s data for unloaded dictionary %s", half, entry.locale)
            return

        if data is None:
            entry.failed_halves.append(half)
        elif half == AFFIX_HALF:
            entry.affix_data = data
        else:
            entry.word_list_data = data

        entry.pending_halves -= 1
        if entry.pending_halves > 0:
            return

        if entry.failed_halves:
            self._fail(entry)
        else:
            self._spawn(self._build(entry))

    async def _build(self, entry: LexiconEntry) -> None:
        assert entry.affix_data is not None and entry.word_list_data is not None
        loop = asyncio.get_running_loop()
        try:
            lexicon = await loop.run_in_executor(
                None, self.lexicon_factory, entry.locale, entry.affix_data, entry.word_list_data
            )
        except Exception as e:
            logger.error("Can't build the dictionary for %s: %s", entry.locale, e)
            if self._is_current(entry):
                self._fail(entry)
            return

        if not self._is_current(entry):
            logger.debug("Discarding built dictionary for unloaded %s", entry.locale)
            return

        entry.lexicon = lexicon
        entry.state = LexiconState.READY
        self._settle(entry.locale, True)
        logger.info("Dictionary has been loaded successfully for %s", entry.locale)
        self.events.trigger(DictionaryEvent.DICTIONARY_LOADED, entry.locale)

    def _fail(self, entry: LexiconEntry) -> None:
        entry.state = LexiconState.FAILED
        del self._entries[entry.locale]
        self._failed.add(entry.locale)
        self._settle(entry.locale, False)
        logger.warning(
            "Dictionary %s failed to load (%s)", entry.locale, ", ".join(entry.failed_halves)
        )
        self.events.trigger(DictionaryEvent.DICTIONARY_FAILED_TO_LOAD, entry.locale)

    def _settle(self, locale: str, ready: bool) -> None:
        waiter = self._waiters.pop(locale, None)
        if waiter is not None and not waiter.done():
            waiter.set_result(ready)

    async def wait_until_settled(self, locale: str) -> bool:
        """Wait for an in-flight load to finish. Returns True if the dictionary is ready."""
        waiter = self._waiters.get(locale)
        if waiter is not None:
            return await asyncio.shield(waiter)
        return self.has_dictionary(locale, ready_only=True)

    async def ensure_loaded(self, name: str | None = None) -> bool:
        """
        Load a locale, or every dictionary of a profile, and wait for the result.

        Returns:
            True if at least one dictionary behind the name is ready
        """
        locales = self.dictionary_names(name)
        self.load(name)
        results = await asyncio.gather(*(self.wait_until_settled(loc) for loc in locales))
        return any(results)

    # Unloading

    def unload(self, locale: str) -> None:
        """Drop a dictionary. A load still in flight for it is ignored when it completes."""
        self._entries.pop(locale, None)
        self._settle(locale, False)
        logger.info("Unloaded dictionary %s", locale)
        self.events.trigger(DictionaryEvent.DICTIONARY_UNLOADED, locale)

    def unload_all(self) -> None:
        self._entries.clear()
        for locale in list(self._waiters):
            self._settle(locale, False)
        logger.info("Unloaded all dictionaries")
        self.events.trigger(DictionaryEvent.DICTIONARIES_UNLOADED)

    # Lookups

    def _lexicon_check(self, lexicon: Lexicon, word: str) -> bool | None:
        try:
            return lexicon.check(word)
        except Exception as e:
            logger.warning("Error checking '%s' in %s: %s", word, lexicon.locale, e)
            return None

    def check(self, word: str, locale: str | None = None) -> bool | None:
        """
        Check a word against a locale or profile.

        For a profile every ready dictionary is consulted in order and the first
        one accepting the word wins. Dictionaries of the profile that aren't
        loaded yet are loaded in the background and skipped for this call. When
        no dictionary accepts the word it is considered misspelled, even if none
        of them was ready yet.

        Args:
            word: The word to check
            locale: Locale or profile name. Defaults to the default locale

        Returns:
            True or False, or None when no dictionary is ready for a bare locale
        """
        ref = self.resolve(locale)

        if isinstance(ref, NamedProfile):
            for name in ref.profile.dictionary_names:
                lexicon = self.get_lexicon(name)
                if lexicon is not None:
                    if self._lexicon_check(lexicon, word):
                        return True
                elif name not in self._failed:
                    self.load_locale(name)
            return False

        lexicon = self.get_lexicon(ref.locale)
        if lexicon is None:
            return None
        return self._lexicon_check(lexicon, word)

    def suggest(self, word: str, locale: str | None = None) -> list[str] | None:
        """
        Suggest spellings from a single dictionary.

        A profile uses its first ready dictionary; suggestions are never merged.

        Returns:
            Suggestions, or None when no dictionary is ready
        """
        for name in self.dictionary_names(locale):
            lexicon = self.get_lexicon(name)
            if lexicon is None:
                continue
            try:
                return lexicon.suggest(word)
            except Exception as e:
                logger.warning("Error suggesting for '%s' in %s: %s", word, name, e)
                return None
        return None

    # Profiles and language lists

    def has_profile(self, name: str) -> bool:
        return name in self._profiles

    def get_profile(self, name: str) -> Profile | None:
        return self._profiles.get(name)

    def get_profile_items(self, name: str) -> tuple[ProfileItem, ...] | None:
        profile = self._profiles.get(name)
        return profile.items if profile is not None else None

    def user_profiles(self) -> dict[str, Profile]:
        return dict(self._profiles)

    def available_languages(self) -> dict[str, LanguageInfo]:
        return dict(self._languages)

    def available_profiles(self) -> dict[str, LanguageInfo]:
        """Installed languages merged with user profiles, profiles taking precedence."""
        merged = dict(self._languages)
        for name in self._profiles:
            merged[name] = LanguageInfo(locale=name, name=name, is_profile=True)
        return merged

    def add_profile(self, profile: Profile) -> None:
        self._profiles[profile.name] = profile
        self.events.trigger(DictionaryEvent.USER_PROFILES_LOADED, self.user_profiles())
        self.events.trigger(DictionaryEvent.LANGUAGE_LIST_LOADED, self.available_profiles())

    async def load_profiles(self) -> dict[str, Profile]:
        """Load user profiles through the file collaborator."""
        self._profiles.update(await self.files.find_profiles())
        self.events.trigger(DictionaryEvent.USER_PROFILES_LOADED, self.user_profiles())
        self.events.trigger(DictionaryEvent.LANGUAGE_LIST_LOADED, self.available_profiles())
        return self.user_profiles()

    async def load_languages(self) -> dict[str, LanguageInfo]:
        """Discover installed languages through the file collaborator."""
        self._languages = await self.files.find_languages()
        self.events.trigger(DictionaryEvent.LANGUAGE_LIST_LOADED, self.available_profiles())
        return self.available_languages()

    async def dictionary_exists(self, name: str) -> bool:
        """Check if a profile with this name exists or both dictionary files are installed."""
        if self.has_profile(name):
            return True
        return await self.files.dictionary_exists(name)
