"""Spell check command."""

from pathlib import Path

import typer
from rich.table import Table

from linguistics.cli.utils.async_runner import open_checker, run_async
from linguistics.cli.utils.console import console, error_console
from linguistics.errors import LinguisticsError
from linguistics.services.checker import Misspelling


def check(
    file_path: Path = typer.Argument(..., help="Path to a text file"),
    locale: str | None = typer.Option(None, "--locale", "-l", help="Locale or profile name"),
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="Document mode for mode specific ignore lists"
    ),
    suggest: bool = typer.Option(False, "--suggest", "-s", help="Show suggestions"),
) -> None:
    """Check the spelling of a text file. Exits with 1 when misspellings are found."""
    if not file_path.is_file():
        error_console.print(f"[error]File not found: {file_path}[/]")
        raise typer.Exit(1)

    try:
        text = file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        error_console.print(f"[error]Not a UTF-8 text file: {file_path}[/]")
        raise typer.Exit(1) from None

    try:
        misspellings = run_async(_check(text, locale, mode, suggest))
    except LinguisticsError as e:
        error_console.print(f"[error]{e}[/]")
        raise typer.Exit(1) from None

    if not misspellings:
        console.print("[success]No spelling mistakes found[/]")
        return

    _print_misspellings(file_path, misspellings, suggest)
    raise typer.Exit(1)


async def _check(
    text: str, locale: str | None, mode: str | None, with_suggestions: bool
) -> list[Misspelling]:
    """Async implementation of check command."""
    checker = await open_checker(locale, mode)
    return checker.check_text(text, with_suggestions=with_suggestions)


def _print_misspellings(file_path: Path, misspellings: list[Misspelling], suggest: bool) -> None:
    table = Table(title=f"{file_path.name}: {len(misspellings)} misspelled words")
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Column", justify="right", style="dim")
    table.add_column("Word", style="word")
    if suggest:
        table.add_column("Suggestions")

    for item in misspellings:
        row = [str(item.line), str(item.column), item.word]
        if suggest:
            row.append(", ".join(item.suggestions) or "[dim]none[/]")
        table.add_row(*row)

    console.print(table)
