"""Notification fan-out for dictionary lifecycle changes."""

import logging
from collections import defaultdict
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[..., None]


class DictionaryEvent(str, Enum):
    """Events emitted by the dictionary registry."""

    DICTIONARY_LOADED = "dictionaryLoaded"  # (locale)
    DICTIONARY_UNLOADED = "dictionaryUnloaded"  # (locale)
    DICTIONARIES_UNLOADED = "dictionariesUnloaded"  # ()
    DICTIONARY_FAILED_TO_LOAD = "dictionaryFailedToLoad"  # (locale)
    LANGUAGE_LIST_LOADED = "languageListLoaded"  # (languages)
    USER_PROFILES_LOADED = "userProfilesLoaded"  # (profiles)


class EventDispatcher:
    """
    Minimal observer list keyed by event type.

    Listeners run synchronously in registration order. A listener that raises
    is logged and skipped so the remaining listeners still see the event.
    """

    def __init__(self) -> None:
        self._listeners: dict[DictionaryEvent, list[Listener]] = defaultdict(list)

    def on(self, event: DictionaryEvent, listener: Listener) -> None:
        """Register a listener for an event."""
        self._listeners[event].append(listener)

    def off(self, event: DictionaryEvent, listener: Listener | None = None) -> None:
        """Remove one listener, or every listener for the event when none is given."""
        if listener is None:
            self._listeners.pop(event, None)
            return
        try:
            self._listeners[event].remove(listener)
        except ValueError:
            pass

    def listener_count(self, event: DictionaryEvent) -> int:
        return len(self._listeners.get(event, ()))

    def trigger(self, event: DictionaryEvent, *args: Any) -> None:
        """Deliver an event to every registered listener."""
        logger.debug("Event %s %s", event.value, args)
        for listener in list(self._listeners.get(event, ())):
            try:
                listener(*args)
            except Exception:
                logger.exception("Listener for %s failed", event.value)
