"""Async runner utilities for CLI commands."""

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from linguistics.config import settings
from linguistics.errors import DictionaryNotFoundError, LinguisticsError
from linguistics.services.checker import SpellChecker

T = TypeVar("T")


def run_async(coro: Coroutine[Any, Any, T]) -> T:
    """Run an async coroutine from synchronous CLI code."""
    return asyncio.run(coro)


async def open_checker(locale: str | None = None, mode: str | None = None) -> SpellChecker:
    """
    Build a spell checker and wait for its dictionaries.

    Must be awaited inside the loop that will use the checker, since dictionary
    loads run as tasks on it.

    Raises:
        DictionaryNotFoundError: If the locale is neither a profile nor installed
        LinguisticsError: If none of the dictionaries could be loaded
    """
    checker = SpellChecker()
    await checker.initialize()

    name = locale or settings.locale_name
    if not await checker.registry.dictionary_exists(name):
        raise DictionaryNotFoundError(name)

    checker.set_mode(mode)
    if not await checker.load_locale(name):
        raise LinguisticsError(f"no dictionary could be loaded for {name}")
    return checker
