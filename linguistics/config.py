"""Application configuration using Pydantic Settings."""

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings, configurable via environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    dictionary_dir: Path = Path("dictionaries")

    # Logging
    log_level: LogLevel = "INFO"
    log_file_enabled: bool = False
    log_file_path: Path | None = None
    log_file_max_bytes: int = 10 * 1024 * 1024  # 10 MB
    log_file_backup_count: int = 5

    @property
    def resolved_log_file_path(self) -> Path:
        """Return log file path, defaulting to dictionary_dir/linguistics.log if not set."""
        return self.log_file_path or self.dictionary_dir / "linguistics.log"

    # Spelling
    locale_name: str = "en_US"
    spell_check_enabled: bool = True
    spelling_ignore_uppercase: bool = True
    detect_quoted_words: bool = True
    detect_camel_case_words: bool = True
    global_ignore_list: list[str] = []
    max_suggestions: int = 5

    # Treat an unreadable .aff file as empty instead of failing the dictionary
    allow_affix_failures: bool = False


settings = Settings()
