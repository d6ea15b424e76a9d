"""Swift source generation for localization entries.

Renders an ordered list of entries into a ``extension String`` source
file, either as flat ``static let`` constants or as members of a nested
``XCTwine`` struct exposed through a single namespace accessor.

All text originating from the catalogue goes through ``escape_text`` before
being emitted, whether it lands in a string literal or a doc comment.
"""

from collections.abc import Sequence
from datetime import date

from xctwine.core.entries import Entry
from xctwine.core.formatting import KeyFormat, format_key
from xctwine.exceptions import InvalidEncodingError, wrap_exception
from xctwine.utils.logging import get_logger

logger = get_logger(__name__)

INDENT = "    "
CONTAINER_NAME = "XCTwine"
NAMESPACE_SUFFIX = "Namespace"
OUTPUT_ENCODING = "utf-8"

# Swift keywords that must be wrapped in backticks to be used as names.
SWIFT_RESERVED_WORDS = frozenset(
    {
        "Any", "Protocol", "Self", "Type", "as", "associatedtype", "break", "case",
        "catch", "class", "continue", "default", "defer", "deinit", "do", "else",
        "enum", "extension", "fallthrough", "false", "fileprivate", "for", "func",
        "guard", "if", "import", "in", "init", "inout", "internal", "is", "let",
        "nil", "open", "operator", "private", "precedencegroup", "protocol",
        "public", "repeat", "rethrows", "return", "self", "static", "struct",
        "subscript", "super", "switch", "throw", "throws", "true", "try",
        "typealias", "var", "where", "while",
    }
)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def escape_text(text: str) -> str:
    """Escape text for use inside a Swift string literal or comment line.

    Backslashes, double quotes, line breaks and other control characters
    are escaped so that the text can neither terminate the literal nor
    spill onto a new source line.
    """
    escaped = []
    for char in text:
        if char in _ESCAPES:
            escaped.append(_ESCAPES[char])
        elif ord(char) < 0x20 or 0x7F <= ord(char) < 0xA0 or char in "\u2028\u2029":
            escaped.append(f"\\u{{{ord(char):X}}}")
        else:
            escaped.append(char)
    return "".join(escaped)


def quote(text: str) -> str:
    """Return ``text`` as a double-quoted Swift string literal."""
    return f'"{escape_text(text)}"'


def swift_identifier(name: str) -> str:
    """Wrap reserved words in backticks."""
    return f"`{name}`" if name in SWIFT_RESERVED_WORDS else name


def format_date(day: date) -> str:
    """Format the header date as ``d/m/yy``."""
    return f"{day.day}/{day.month}/{day:%y}"


def namespace_name(namespace: str) -> str:
    """Normalize a namespace into the accessor name.

    The accessor lives next to the ``XCTwine`` struct, so a namespace that
    normalizes to the container name is suffixed.
    """
    name = format_key(namespace, KeyFormat.NONE)
    if name == CONTAINER_NAME:
        renamed = f"{name}{NAMESPACE_SUFFIX}"
        logger.warning("namespace_renamed", namespace=namespace, renamed_to=renamed)
        return renamed
    return name


class CodeGenerator:
    """Render entries as a Swift ``String`` extension.

    Args:
        output_file_name: File name written in the header comment
        namespace: Accessor name for namespaced output, ``None`` for flat constants
        generated_on: Date written in the header (defaults to today)
    """

    def __init__(
        self,
        output_file_name: str,
        namespace: str | None = None,
        generated_on: date | None = None,
    ):
        self.output_file_name = output_file_name
        self.namespace = namespace_name(namespace) if namespace else None
        self.generated_on = generated_on or date.today()

    def render(self, entries: Sequence[Entry]) -> str:
        """Render the complete source file."""
        lines = self._header()
        lines.append(f"extension String /* {CONTAINER_NAME} */ {{")

        if self.namespace:
            lines.extend(self._namespaced_body(entries))
        else:
            lines.extend(self._entry_blocks(entries, depth=1, declaration="static let"))

        lines.append("}")
        return "\n".join(lines)

    def _header(self) -> list[str]:
        return [
            "//",
            f"// {escape_text(self.output_file_name)}",
            "//",
            f"// Created by {CONTAINER_NAME} on {format_date(self.generated_on)}.",
            "//",
            "",
        ]

    def _namespaced_body(self, entries: Sequence[Entry]) -> list[str]:
        assert self.namespace is not None
        lines = [f"{INDENT}struct {CONTAINER_NAME} /* Namespace */ {{"]
        lines.extend(self._entry_blocks(entries, depth=2, declaration="let"))
        lines.append(f"{INDENT}}}")
        lines.append("")
        lines.append(f"{INDENT}/// Localization namespace generated by {CONTAINER_NAME}.")
        lines.append(
            f"{INDENT}static var {swift_identifier(self.namespace)}: {CONTAINER_NAME} {{"
        )
        lines.append(f"{INDENT * 2}return {CONTAINER_NAME}()")
        lines.append(f"{INDENT}}}")
        return lines

    def _entry_blocks(self, entries: Sequence[Entry], depth: int, declaration: str) -> list[str]:
        indent = INDENT * depth
        lines: list[str] = []

        for index, entry in enumerate(entries):
            if index:
                lines.append("")
            if entry.comment is not None:
                lines.append(f"{indent}/// {escape_text(entry.comment)}")
            lines.append(
                f"{indent}{declaration} {swift_identifier(entry.formatted_key)}: String = "
                f"{quote(entry.key)}"
            )

        return lines


def render(
    entries: Sequence[Entry],
    output_file_name: str,
    namespace: str | None = None,
    *,
    generated_on: date | None = None,
) -> str:
    """Render entries as Swift source.

    Args:
        entries: Entries in output order
        output_file_name: File name written in the header comment
        namespace: Accessor name for namespaced output, ``None`` for flat constants
        generated_on: Date written in the header (defaults to today)

    Returns:
        Complete source text ending with the extension's closing brace
    """
    return CodeGenerator(output_file_name, namespace, generated_on).render(entries)


def encode_output(text: str) -> bytes:
    """Encode generated source for writing.

    Raises:
        InvalidEncodingError: If the text holds characters UTF-8 cannot encode
    """
    try:
        return text.encode(OUTPUT_ENCODING)
    except UnicodeEncodeError as e:
        raise wrap_exception(
            e,
            exception_class=InvalidEncodingError,
            encoding=OUTPUT_ENCODING,
            position=e.start,
        ) from e
