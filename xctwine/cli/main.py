"""Main CLI entry point for XCTwine."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from xctwine import __version__
from xctwine.core.formatting import KeyFormat
from xctwine.core.service import GenerationRequest, GenerationResult, generate, preview
from xctwine.exceptions import ConfigurationError, InputError, XCTwineError
from xctwine.utils.config import get_settings
from xctwine.utils.logging import configure_from_settings, get_logger

app = typer.Typer(
    name="xctwine",
    help="🧶 Translate Xcode string catalogues into typed Swift string extensions",
    add_completion=False,
    rich_markup_mode="rich",
)
console = Console(emoji=False, highlight=False)
err_console = Console(stderr=True, emoji=False, highlight=False)
logger = get_logger(__name__)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold blue]XCTwine[/bold blue] version {__version__}")
        raise typer.Exit()


def _log(out: Console, message: str) -> None:
    out.print(f"[cyan]{message}[/cyan]")


def _error(out: Console, error: XCTwineError) -> None:
    out.print(f"[red]😢 {escape(error.message)}[/red]")


def _report(
    out: Console, request: GenerationRequest, result: GenerationResult, written: bool = True
) -> None:
    """Print the progress messages for a finished run."""
    if isinstance(result.error, InputError):
        _error(out, result.error)
        return

    _log(
        out,
        f"🧶 Translating [green bold]{escape(request.input_path.name)}[/green bold] → "
        f"[green bold]{escape(request.output_path.name)}[/green bold]",
    )

    if result.entries:
        _log(out, f"🔑 Found {result.entry_count} localization entry(s)")
        for entry in result.entries:
            _log(out, f"   ﹂[green]{escape(entry.key)}[/green]")

        _log(
            out,
            f"📝 Creating [green bold]{escape(request.output_path.name)}[/green bold] "
            f"extension file [yellow]({request.key_format.label})[/yellow]",
        )

    if result.error is not None:
        _error(out, result.error)
        return

    if not written:
        _log(out, "🔍 Dry run, no file written")
        return

    _log(
        out,
        f"🎉 Successfully generated [green bold]{escape(str(request.output_path))}[/green bold]",
    )


@app.command()
def main(
    input_file: Path = typer.Argument(..., help="The input xcstring file"),
    output_file: Path = typer.Argument(..., help="The output string-extension file"),
    namespace: Optional[str] = typer.Option(
        None,
        "--namespace",
        "-n",
        help="The output string-extension namespace",
    ),
    key_format: Optional[KeyFormat] = typer.Option(
        None,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output localization key format [default: camel]",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the generated source instead of writing it",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """
    Translate an xcstrings catalogue into a typed Swift string extension.

    Every localization key becomes a constant on [bold]extension String[/bold],
    either directly or grouped under the given namespace.
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        _error(err_console if dry_run else console, e)
        raise typer.Exit(1) from e
    configure_from_settings(settings, verbose=verbose)

    request = GenerationRequest(
        input_path=input_file,
        output_path=output_file,
        key_format=key_format or settings.default_format,
        namespace=namespace,
    )

    if dry_run:
        result = preview(request, settings=settings)
        _report(err_console, request, result, written=False)
        if result.success and result.output is not None:
            typer.echo(result.output)
    else:
        result = generate(request, settings=settings)
        _report(console, request, result)

    if not result.success:
        logger.debug("generation_result", **result.to_dict())
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
