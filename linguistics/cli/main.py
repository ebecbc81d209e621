"""Main CLI application entry point."""

import typer

from linguistics.cli.commands import check, languages, suggest
from linguistics.config import settings
from linguistics.logging_config import setup_logging

app = typer.Typer(
    name="linguistics",
    help="Spell checker built on Hunspell dictionaries",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def startup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Initialize logging on startup."""
    if verbose:
        settings.log_level = "DEBUG"
    setup_logging()


app.command(name="check", help="Check the spelling of a text file")(check.check)
app.command(name="suggest", help="Suggest spellings for a word")(suggest.suggest)
app.command(name="languages", help="List installed languages and user profiles")(
    languages.languages
)


if __name__ == "__main__":
    app()
