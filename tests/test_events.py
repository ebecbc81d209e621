"""Tests for dictionary lifecycle events."""

import logging
from unittest.mock import MagicMock

from linguistics.services.events import DictionaryEvent, EventDispatcher


class TestDictionaryEvent:
    """Tests for DictionaryEvent values."""

    def test_event_names(self):
        """Should use the established event names."""
        assert DictionaryEvent.DICTIONARY_LOADED.value == "dictionaryLoaded"
        assert DictionaryEvent.DICTIONARIES_UNLOADED.value == "dictionariesUnloaded"
        assert DictionaryEvent("dictionaryFailedToLoad") is DictionaryEvent.DICTIONARY_FAILED_TO_LOAD


class TestEventDispatcher:
    """Tests for EventDispatcher."""

    def test_trigger_calls_listeners_in_order(self):
        """Should call every listener with the event arguments, in registration order."""
        dispatcher = EventDispatcher()
        calls = []
        dispatcher.on(DictionaryEvent.DICTIONARY_LOADED, lambda loc: calls.append(("a", loc)))
        dispatcher.on(DictionaryEvent.DICTIONARY_LOADED, lambda loc: calls.append(("b", loc)))

        dispatcher.trigger(DictionaryEvent.DICTIONARY_LOADED, "en_US")

        assert calls == [("a", "en_US"), ("b", "en_US")]

    def test_trigger_only_matching_event(self):
        """Should not call listeners of other events."""
        dispatcher = EventDispatcher()
        listener = MagicMock()
        dispatcher.on(DictionaryEvent.DICTIONARY_UNLOADED, listener)

        dispatcher.trigger(DictionaryEvent.DICTIONARY_LOADED, "en_US")

        listener.assert_not_called()

    def test_trigger_without_listeners(self):
        """Should do nothing when nobody listens."""
        EventDispatcher().trigger(DictionaryEvent.DICTIONARIES_UNLOADED)

    def test_off_removes_listener(self):
        """Should stop calling a removed listener."""
        dispatcher = EventDispatcher()
        listener = MagicMock()
        other = MagicMock()
        dispatcher.on(DictionaryEvent.DICTIONARY_LOADED, listener)
        dispatcher.on(DictionaryEvent.DICTIONARY_LOADED, other)

        dispatcher.off(DictionaryEvent.DICTIONARY_LOADED, listener)
        dispatcher.trigger(DictionaryEvent.DICTIONARY_LOADED, "en_US")

        listener.assert_not_called()
        other.assert_called_once_with("en_US")

    def test_off_all_listeners(self):
        """Should remove every listener when none is given."""
        dispatcher = EventDispatcher()
        dispatcher.on(DictionaryEvent.DICTIONARY_LOADED, MagicMock())
        dispatcher.on(DictionaryEvent.DICTIONARY_LOADED, MagicMock())

        dispatcher.off(DictionaryEvent.DICTIONARY_LOADED)

        assert dispatcher.listener_count(DictionaryEvent.DICTIONARY_LOADED) == 0

    def test_off_unknown_listener(self):
        """Should ignore listeners that were never registered."""
        dispatcher = EventDispatcher()
        dispatcher.off(DictionaryEvent.DICTIONARY_LOADED, MagicMock())
        assert dispatcher.listener_count(DictionaryEvent.DICTIONARY_LOADED) == 0

    def test_failing_listener_does_not_stop_fan_out(self, caplog):
        """Should log a failing listener and keep notifying the rest."""
        dispatcher = EventDispatcher()
        after = MagicMock()
        dispatcher.on(DictionaryEvent.DICTIONARY_LOADED, MagicMock(side_effect=RuntimeError("boom")))
        dispatcher.on(DictionaryEvent.DICTIONARY_LOADED, after)

        with caplog.at_level(logging.ERROR):
            dispatcher.trigger(DictionaryEvent.DICTIONARY_LOADED, "en_US")

        after.assert_called_once_with("en_US")
        assert "Listener for dictionaryLoaded failed" in caplog.text
