"""String helpers used by the scanner and the spelling classifier."""

import re

# Characters that end a word. Whitespace is handled separately.
WORD_SEPARATORS = frozenset("!\"#$%&()*+,-./:;<=>?@[\\]^_`{|}~ ∎®")

_SEPARATOR_PATTERN = re.compile(r"[!\"#$%&()*+,\-./:;<=>?@\[\\\]^_`{|}~\s]")

# Leading numeric literal, as accepted by JavaScript's parseFloat
_NUMBER_PREFIX = re.compile(
    r"\s*[+-]?(?:Infinity|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)

_CAMEL_CASE_TOKEN = re.compile(r"(?:^\w|[A-Z]|\b\w|\s+)")

_UPPER_CASE_BOUNDARY = re.compile(r"(?=[A-Z])")


def is_word_separator(char: str) -> bool:
    """Check if a single character separates words."""
    return char in WORD_SEPARATORS or char.isspace()


def contains_word_separator(text: str) -> bool:
    """Check if a string contains any word separator."""
    return _SEPARATOR_PATTERN.search(text) is not None


def starts_with_number(word: str) -> bool:
    """Check if a word begins with something a float parser would accept."""
    return _NUMBER_PREFIX.match(word) is not None


def trim_char(text: str, char: str = " ") -> str:
    """Remove every leading and trailing occurrence of a character."""
    return text.strip(char)


def occurrences(text: str, sub: str, allow_overlapping: bool = False) -> int:
    """Count occurrences of a substring."""
    if not sub:
        return len(text) + 1

    count = 0
    pos = 0
    step = 1 if allow_overlapping else len(sub)
    while True:
        pos = text.find(sub, pos)
        if pos < 0:
            return count
        count += 1
        pos += step


def to_camel_case(text: str) -> str:
    """
    Convert space separated text to camelCase.

    Whitespace runs and literal zeros are dropped, the first word character is
    lower-cased and every other word start is upper-cased.
    """

    def _replace(match: re.Match[str]) -> str:
        token = match.group(0)
        if token.isspace() or token == "0":
            return ""
        return token.lower() if match.start() == 0 else token.upper()

    return _CAMEL_CASE_TOKEN.sub(_replace, text)


def is_camel_case(text: str) -> bool:
    """
    Determine if a string is camelCased.

    Every character that is unchanged by upper-casing is turned into a space
    followed by its lower-case form. The string is camel case when that produced
    at least one split and converting the result back reproduces the input.
    """
    expanded = "".join(
        " " + char.lower() if char.upper() == char else char for char in text
    )

    if occurrences(expanded, " ") == 0:
        return False

    return to_camel_case(expanded) == text


def split_by_upper_case(text: str) -> list[str]:
    """Split a string in front of every upper-case ASCII letter."""
    return [part for part in _UPPER_CASE_BOUNDARY.split(text) if part]
