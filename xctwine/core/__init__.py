"""Key formatting and code generation pipeline.

The generation service lives in ``xctwine.core.service``.
"""

from xctwine.core.entries import Entry, RawEntry, build_entries
from xctwine.core.formatting import KeyFormat, format_key, split_words
from xctwine.core.generator import CodeGenerator, encode_output, escape_text, quote, render

__all__ = [
    "Entry",
    "RawEntry",
    "build_entries",
    "KeyFormat",
    "format_key",
    "split_words",
    "CodeGenerator",
    "encode_output",
    "escape_text",
    "quote",
    "render",
]
