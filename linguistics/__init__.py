"""Spell checking with Hunspell dictionaries, profiles and contextual ignore lists."""

__version__ = "0.1.0"
