"""Reading ``.xcstrings`` string catalogues.

An Xcode string catalogue is a JSON document of the form::

    {
      "sourceLanguage" : "en",
      "strings" : {
        "MY_STRING_KEY" : {
          "comment" : "This is a really cool key",
          "extractionState" : "manual",
          "localizations" : { ... }
        }
      },
      "version" : "1.0"
    }

Only the keys of ``strings`` and their optional ``comment`` are used.
"""

import json
from pathlib import Path

from xctwine.core.entries import RawEntry
from xctwine.exceptions import MalformedCatalogueError, wrap_exception
from xctwine.utils.logging import get_logger

logger = get_logger(__name__)


def parse_catalogue(payload: object) -> dict[str, RawEntry]:
    """Extract raw entries from a decoded catalogue document.

    Args:
        payload: Decoded JSON document

    Returns:
        Mapping of raw key to its metadata, in document order

    Raises:
        MalformedCatalogueError: If the document has no ``strings`` object
    """
    if not isinstance(payload, dict):
        raise MalformedCatalogueError(
            "Catalogue must be a JSON object",
            context={"type": type(payload).__name__},
        )

    strings = payload.get("strings")
    if not isinstance(strings, dict):
        raise MalformedCatalogueError("Catalogue has no 'strings' object")

    entries = {}
    for key, value in strings.items():
        comment = value.get("comment") if isinstance(value, dict) else None
        entries[key] = RawEntry(comment=comment if isinstance(comment, str) else None)
    return entries


def load_catalogue(path: Path) -> dict[str, RawEntry]:
    """Load a string catalogue from disk.

    Raises:
        MalformedCatalogueError: If the file cannot be read or parsed
    """
    try:
        with path.open(encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise wrap_exception(
            e,
            exception_class=MalformedCatalogueError,
            path=str(path),
        ) from e

    entries = parse_catalogue(payload)
    logger.info("catalogue_loaded", path=str(path), entry_count=len(entries))
    return entries
