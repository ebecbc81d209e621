"""Exception types shared across the spell checking services."""


class LinguisticsError(Exception):
    """Base spell checker error."""


class DictionaryNotFoundError(LinguisticsError):
    """Dictionary files not found error."""

    def __init__(self, locale: str) -> None:
        self.locale = locale
        super().__init__(f"dictionary {locale} not installed")


class MalformedFileError(LinguisticsError):
    """A JSON data file could not be parsed or is missing required fields."""

    kind = "data"

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"malformed {self.kind} file {source}: {reason}")


class MalformedProfileError(MalformedFileError):
    kind = "profile"


class MalformedIgnoreRuleError(MalformedFileError):
    kind = "ignore rule"


class MalformedLanguageError(MalformedFileError):
    kind = "language"
