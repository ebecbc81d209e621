"""Tests for the command line interface."""

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from conftest import fake_lexicon_factory
from linguistics.cli.main import app
from linguistics.config import settings

runner = CliRunner()


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, dictionary_root):
    """Point the CLI at the test dictionary tree and use fake lexicons."""
    monkeypatch.setattr(settings, "dictionary_dir", dictionary_root)
    monkeypatch.setattr(settings, "locale_name", "en_US")
    monkeypatch.setattr(settings, "global_ignore_list", [])
    monkeypatch.setattr(settings, "spell_check_enabled", True)
    monkeypatch.setattr(settings, "spelling_ignore_uppercase", True)
    monkeypatch.setattr(
        "linguistics.services.dictionary.registry.hunspell_factory", fake_lexicon_factory
    )
    with patch("linguistics.cli.main.setup_logging"):
        yield


class TestCheckCommand:
    """Tests for the check command."""

    def test_reports_misspellings(self, tmp_path):
        """Should list misspelled words and exit with 1."""
        document = tmp_path / "doc.txt"
        document.write_text("The qucik brown fox\njumps over the lazzy dog\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(document)])

        assert result.exit_code == 1
        assert "qucik" in result.stdout
        assert "lazzy" in result.stdout
        assert "brown" not in result.stdout

    def test_clean_file(self, tmp_path):
        """Should exit with 0 when nothing is misspelled."""
        document = tmp_path / "doc.txt"
        document.write_text("Hello, world!\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(document)])

        assert result.exit_code == 0
        assert "No spelling mistakes found" in result.stdout

    def test_suggestions(self, tmp_path):
        """Should show suggestions when asked."""
        document = tmp_path / "doc.txt"
        document.write_text("qucik\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(document), "--suggest"])

        assert result.exit_code == 1
        assert "quick" in result.stdout

    def test_mode(self, tmp_path):
        """Should apply mode specific ignore lists."""
        document = tmp_path / "script.py"
        document.write_text("test elif\n", encoding="utf-8")

        assert runner.invoke(app, ["check", str(document)]).exit_code == 1
        assert runner.invoke(app, ["check", str(document), "--mode", "Mode.python"]).exit_code == 0

    def test_profile(self, tmp_path):
        """Should check against every dictionary of a profile."""
        document = tmp_path / "doc.txt"
        document.write_text("hello Haus\n", encoding="utf-8")

        assert runner.invoke(app, ["check", str(document)]).exit_code == 1
        assert runner.invoke(app, ["check", str(document), "-l", "bilingual"]).exit_code == 0

    def test_missing_file(self, tmp_path):
        """Should fail for a missing file."""
        result = runner.invoke(app, ["check", str(tmp_path / "missing.txt")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_binary_file(self, tmp_path):
        """Should fail for files that are not UTF-8 text."""
        document = tmp_path / "blob.bin"
        document.write_bytes(b"\xff\xfe\x00garbage")

        result = runner.invoke(app, ["check", str(document)])

        assert result.exit_code == 1
        assert "Not a UTF-8 text file" in result.output

    def test_unknown_locale(self, tmp_path):
        """Should fail for a locale that is not installed."""
        document = tmp_path / "doc.txt"
        document.write_text("bonjour\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(document), "--locale", "fr_FR"])

        assert result.exit_code == 1
        assert "dictionary fr_FR not installed" in result.output


class TestSuggestCommand:
    """Tests for the suggest command."""

    def test_suggest(self):
        """Should print suggestions for a misspelled word."""
        result = runner.invoke(app, ["suggest", "qucik"])

        assert result.exit_code == 0
        assert "quick" in result.stdout

    def test_correct_word(self):
        """Should say so when the word is spelled correctly."""
        result = runner.invoke(app, ["suggest", "hello"])

        assert result.exit_code == 0
        assert "is spelled correctly" in result.stdout

    def test_no_suggestions(self):
        """Should say so when nothing comes close."""
        result = runner.invoke(app, ["suggest", "xyzzy"])

        assert result.exit_code == 0
        assert "No suggestions" in result.stdout

    def test_other_locale(self):
        """Should suggest from the requested locale."""
        result = runner.invoke(app, ["suggest", "hau", "--locale", "de_DE"])

        assert result.exit_code == 0
        assert "haus" in result.stdout


class TestLanguagesCommand:
    """Tests for the languages command."""

    def test_lists_languages_and_profiles(self):
        """Should list installed languages and user profiles."""
        result = runner.invoke(app, ["languages"])

        assert result.exit_code == 0
        assert "en_US" in result.stdout
        assert "Deutsch" in result.stdout
        assert "bilingual" in result.stdout
        assert "profile" in result.stdout

    def test_no_languages(self, monkeypatch, tmp_path):
        """Should say so when nothing is installed."""
        monkeypatch.setattr(settings, "dictionary_dir", tmp_path / "empty")

        result = runner.invoke(app, ["languages"])

        assert result.exit_code == 0
        assert "No languages installed" in result.stdout


class TestVerboseOption:
    """Tests for the global options."""

    def test_verbose_enables_debug(self, monkeypatch):
        """Should switch to debug logging."""
        monkeypatch.setattr(settings, "log_level", "INFO")

        result = runner.invoke(app, ["--verbose", "languages"])

        assert result.exit_code == 0
        assert settings.log_level == "DEBUG"
