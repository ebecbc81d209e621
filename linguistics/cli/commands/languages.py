"""Installed languages command."""

from rich.table import Table

from linguistics.cli.utils.async_runner import run_async
from linguistics.cli.utils.console import console
from linguistics.services.dictionary.base import LanguageInfo
from linguistics.services.dictionary.registry import DictionaryRegistry


def languages() -> None:
    """List installed languages and user profiles."""
    available = run_async(_languages())

    if not available:
        console.print("[warning]No languages installed.[/]")
        return

    table = Table(title="Languages")
    table.add_column("Locale", style="locale")
    table.add_column("Name")
    table.add_column("Type", style="dim")

    for locale in sorted(available):
        info = available[locale]
        table.add_row(info.locale, info.name, "profile" if info.is_profile else "dictionary")

    console.print(table)


async def _languages() -> dict[str, LanguageInfo]:
    """Async implementation of languages command."""
    registry = DictionaryRegistry()
    await registry.load_profiles()
    await registry.load_languages()
    return registry.available_profiles()
