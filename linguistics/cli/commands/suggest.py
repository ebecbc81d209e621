"""Suggestion command."""

import typer

from linguistics.cli.utils.async_runner import open_checker, run_async
from linguistics.cli.utils.console import console, error_console
from linguistics.errors import LinguisticsError


def suggest(
    word: str = typer.Argument(..., help="Word to look up"),
    locale: str | None = typer.Option(None, "--locale", "-l", help="Locale or profile name"),
) -> None:
    """Suggest spellings for a word."""
    try:
        correct, suggestions = run_async(_suggest(word, locale))
    except LinguisticsError as e:
        error_console.print(f"[error]{e}[/]")
        raise typer.Exit(1) from None

    if correct:
        console.print(f"[word]{word}[/] [success]is spelled correctly[/]")
        return

    if not suggestions:
        console.print(f"[warning]No suggestions for[/] [word]{word}[/]")
        return

    console.print(f"Suggestions for [word]{word}[/]:")
    for candidate in suggestions:
        console.print(f"  {candidate}")


async def _suggest(word: str, locale: str | None) -> tuple[bool, list[str]]:
    """Async implementation of suggest command."""
    checker = await open_checker(locale)
    if checker.registry.check(word, checker.locale):
        return True, []
    return False, checker.suggest(word)
