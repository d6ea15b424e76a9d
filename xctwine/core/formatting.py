"""Identifier formatting for localization keys.

Turns an arbitrary catalogue key into a legal identifier under one of the
supported key formats. Formatting never fails: any input yields a
non-empty identifier made of letters, ASCII digits and underscores that
does not start with a digit and is never a bare underscore.
"""

from enum import Enum

#: Characters treated as word separators.
SEPARATORS = frozenset("_-.")

#: Prepended when an identifier would be empty or start with a digit.
SAFE_MARKER = "_"

#: Used for keys without a single identifier character.
FALLBACK_NAME = "key"


class KeyFormat(str, Enum):
    """Naming convention applied to localization keys."""

    NONE = "none"  # Separators dropped, casing untouched
    CAMEL = "camel"  # myStringKey
    PASCAL = "pascal"  # MyStringKey

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Short description used in console output."""
        if self is KeyFormat.NONE:
            return "unformatted"
        return f"{self.value}-formatted"


def _is_identifier_char(char: str) -> bool:
    return char.isalpha() or (char.isdigit() and char.isascii())


def _split_separators(raw_key: str) -> list[str]:
    words = []
    current: list[str] = []
    for char in raw_key:
        if char in SEPARATORS or char.isspace():
            words.append("".join(current))
            current = []
        else:
            current.append(char)
    words.append("".join(current))
    return words


def _split_case(word: str) -> list[str]:
    """Split ``helloWorld`` into ``hello``/``World`` and ``HTTPServer`` into ``HTTP``/``Server``."""
    parts = []
    start = 0
    for i in range(1, len(word)):
        prev, char = word[i - 1], word[i]
        following = word[i + 1] if i + 1 < len(word) else ""
        if not char.isupper():
            continue
        if prev.islower() or prev.isdigit():
            parts.append(word[start:i])
            start = i
        elif prev.isupper() and following.islower():
            parts.append(word[start:i])
            start = i
    parts.append(word[start:])
    return parts


def split_words(raw_key: str) -> list[str]:
    """Split a raw key into its words.

    Words are delimited by underscores, hyphens, periods, whitespace and
    case transitions. Characters that cannot appear in an identifier are
    dropped and empty words are discarded.

    Args:
        raw_key: Key exactly as it appears in the catalogue

    Returns:
        List of non-empty words
    """
    words = []
    for chunk in _split_separators(raw_key):
        cleaned = "".join(char for char in chunk if _is_identifier_char(char))
        words.extend(part for part in _split_case(cleaned) if part)
    return words


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def _join_none(words: list[str]) -> str:
    return "".join(words)


def _join_camel(words: list[str]) -> str:
    if not words:
        return ""
    return words[0].lower() + "".join(_capitalize(word) for word in words[1:])


def _join_pascal(words: list[str]) -> str:
    return "".join(_capitalize(word) for word in words)


_JOINERS = {
    KeyFormat.NONE: _join_none,
    KeyFormat.CAMEL: _join_camel,
    KeyFormat.PASCAL: _join_pascal,
}


def format_key(raw_key: str, key_format: KeyFormat = KeyFormat.CAMEL) -> str:
    """Format a raw localization key as an identifier.

    Args:
        raw_key: Key exactly as it appears in the catalogue
        key_format: Naming convention to apply

    Returns:
        Legal identifier; the same input always gives the same output

    Example:
        >>> format_key("user_name", KeyFormat.CAMEL)
        'userName'
        >>> format_key("123abc", KeyFormat.CAMEL)
        '_123abc'
        >>> format_key("!!!", KeyFormat.CAMEL)
        '_key'
    """
    identifier = _JOINERS[KeyFormat(key_format)](split_words(raw_key))

    # Case mapping can introduce combining marks (e.g. "ǰ".upper())
    identifier = "".join(char for char in identifier if _is_identifier_char(char))

    if not identifier:
        identifier = SAFE_MARKER + FALLBACK_NAME
    elif identifier[0].isdigit():
        identifier = SAFE_MARKER + identifier
    return identifier
