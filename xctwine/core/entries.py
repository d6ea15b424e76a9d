"""Localization entries built from a parsed catalogue."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from xctwine.core.formatting import KeyFormat, format_key
from xctwine.exceptions import EmptyCatalogueError
from xctwine.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RawEntry:
    """Metadata read from the catalogue for one key."""

    comment: str | None = None


@dataclass(frozen=True)
class Entry:
    """A localization key ready to be rendered.

    Attributes:
        key: Key exactly as it appears in the catalogue
        formatted_key: Identifier the key is exposed under
        comment: Developer comment from the catalogue, if any
    """

    key: str
    formatted_key: str
    comment: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "key": self.key,
            "formatted_key": self.formatted_key,
            "comment": self.comment,
        }


def _comment_of(payload: RawEntry | Mapping[str, Any] | None) -> str | None:
    if isinstance(payload, RawEntry):
        return payload.comment
    if isinstance(payload, Mapping):
        comment = payload.get("comment")
        return comment if isinstance(comment, str) else None
    return None


def _dedupe(entries: list[Entry]) -> list[Entry]:
    """Give numeric suffixes to identifiers claimed by an earlier key."""
    taken = {entry.formatted_key for entry in entries}
    seen: set[str] = set()
    result = []

    for entry in entries:
        if entry.formatted_key not in seen:
            seen.add(entry.formatted_key)
            result.append(entry)
            continue

        suffix = 2
        while f"{entry.formatted_key}{suffix}" in taken:
            suffix += 1
        renamed = f"{entry.formatted_key}{suffix}"
        taken.add(renamed)
        seen.add(renamed)

        logger.warning(
            "identifier_collision",
            key=entry.key,
            identifier=entry.formatted_key,
            renamed_to=renamed,
        )
        result.append(Entry(key=entry.key, formatted_key=renamed, comment=entry.comment))

    return result


def build_entries(
    raw_entries: Mapping[str, RawEntry | Mapping[str, Any] | None],
    key_format: KeyFormat = KeyFormat.CAMEL,
) -> list[Entry]:
    """Build the ordered entry list for a catalogue.

    Entries are sorted by raw key (code point order) so the generated file
    is identical for identical catalogues. Keys that format to the same
    identifier are disambiguated with numeric suffixes, the first key in
    sort order keeping the bare name.

    Args:
        raw_entries: Mapping of raw key to its catalogue metadata
        key_format: Naming convention for the identifiers

    Returns:
        Entries sorted by key

    Raises:
        EmptyCatalogueError: If the catalogue has no entries
    """
    if not raw_entries:
        raise EmptyCatalogueError()

    entries = sorted(
        (
            Entry(
                key=key,
                formatted_key=format_key(key, key_format),
                comment=_comment_of(payload),
            )
            for key, payload in raw_entries.items()
        ),
        key=lambda entry: entry.key,
    )

    logger.debug("entries_built", entry_count=len(entries), key_format=str(key_format))
    return _dedupe(entries)
