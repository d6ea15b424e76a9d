"""Generation service.

Runs the whole pipeline for one catalogue: input checks, loading, entry
building, rendering, encoding and writing. Failures are reported through
``GenerationResult`` instead of being raised, so callers only have to look
at ``result.success``.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from xctwine.core.catalogue import load_catalogue
from xctwine.core.entries import Entry, build_entries
from xctwine.core.formatting import KeyFormat
from xctwine.core.generator import encode_output, render
from xctwine.core.writer import write_output
from xctwine.exceptions import (
    InputNotFoundError,
    InvalidInputExtensionError,
    InvalidOutputExtensionError,
    XCTwineError,
)
from xctwine.utils.config import Settings, get_settings
from xctwine.utils.logging import LogPerformance, get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """Parameters of one generation run."""

    input_path: Path
    output_path: Path
    key_format: KeyFormat = KeyFormat.CAMEL
    namespace: str | None = None


@dataclass
class GenerationResult:
    """Outcome of a generation run.

    ``output`` holds the rendered source when rendering succeeded, ``error``
    the failure that stopped the run otherwise.
    """

    success: bool
    output_path: Path
    entries: list[Entry] = field(default_factory=list)
    output: str | None = None
    error: XCTwineError | None = None

    @property
    def entry_count(self) -> int:
        """Number of entries found in the catalogue."""
        return len(self.entries)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": self.success,
            "output_path": str(self.output_path),
            "entry_count": self.entry_count,
            "entries": [entry.to_dict() for entry in self.entries],
            "error": str(self.error) if self.error else None,
        }

    def __str__(self) -> str:
        status = "ok" if self.success else f"failed: {self.error}"
        return f"GenerationResult({self.output_path}, entries={self.entry_count}, {status})"


def _suffix(path: Path) -> str:
    return path.suffix.lstrip(".").lower()


def validate_paths(request: GenerationRequest, settings: Settings) -> None:
    """Check the input exists and both paths carry the expected extensions.

    Raises:
        InputNotFoundError: If the input file does not exist
        InvalidInputExtensionError: If the input is not a string catalogue
        InvalidOutputExtensionError: If the output is not a source file
    """
    if not request.input_path.is_file():
        raise InputNotFoundError(path=str(request.input_path))

    if _suffix(request.input_path) != settings.input_extension:
        raise InvalidInputExtensionError(
            f"Input file has an invalid extension, expected .{settings.input_extension}",
            path=str(request.input_path),
            expected=settings.input_extension,
        )

    if _suffix(request.output_path) != settings.output_extension:
        raise InvalidOutputExtensionError(
            f"Output file has an invalid extension, expected .{settings.output_extension}",
            path=str(request.output_path),
            expected=settings.output_extension,
        )


def _run(
    request: GenerationRequest,
    settings: Settings,
    generated_on: date | None,
    write: bool,
) -> GenerationResult:
    result = GenerationResult(success=False, output_path=request.output_path)
    log = logger.bind(
        input_path=str(request.input_path),
        output_path=str(request.output_path),
        key_format=str(request.key_format),
        namespace=request.namespace,
    )

    try:
        with LogPerformance("generation", log):
            validate_paths(request, settings)

            raw_entries = load_catalogue(request.input_path)
            result.entries = build_entries(raw_entries, request.key_format)

            result.output = render(
                result.entries,
                request.output_path.name,
                request.namespace,
                generated_on=generated_on,
            )
            data = encode_output(result.output)

            if write:
                write_output(request.output_path, data)
    except XCTwineError as e:
        result.error = e
        return result

    result.success = True
    return result


def generate(
    request: GenerationRequest,
    *,
    settings: Settings | None = None,
    generated_on: date | None = None,
) -> GenerationResult:
    """Generate the source file described by ``request``.

    Args:
        request: Input/output paths and formatting options
        settings: Settings to use (defaults to the cached application settings)
        generated_on: Date for the file header (defaults to today)

    Returns:
        Result of the run; nothing is written unless it succeeded
    """
    return _run(request, settings or get_settings(), generated_on, write=True)


def preview(
    request: GenerationRequest,
    *,
    settings: Settings | None = None,
    generated_on: date | None = None,
) -> GenerationResult:
    """Run the pipeline without writing the output file."""
    return _run(request, settings or get_settings(), generated_on, write=False)
