"""CLI entrypoint for the Trint batch upload tool."""

from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from trint_batch.config import (
    API_KEY_ID_ENV,
    API_KEY_SECRET_ENV,
    UploadDefaults,
    build_options,
    load_upload_config,
)
from trint_batch.errors import BatchUploadError
from trint_batch.log import setup_logging

# Values from a local .env fill in unset environment variables only
load_dotenv()

app = typer.Typer(
    name="batch-upload",
    help="Cross-platform batch upload utility for Trint",
    no_args_is_help=True,
)
console = Console()

UPLOAD_EPILOG = """
Examples:

  batch-upload upload -k KEY_ID -s SECRET -f audio.mp3

  batch-upload upload -k KEY_ID -s SECRET -p "./recordings/**/*.mp3" -c 5

  batch-upload upload -k KEY_ID -s SECRET -p "~/Videos/*.mp3" -p "~/Music/**/*.wav"

  batch-upload upload -k KEY_ID -s SECRET -P patterns.txt -c 3

Pattern files (-P) hold one glob pattern per line. Text after # is a comment,
blank lines are ignored and surrounding whitespace is stripped.
"""


@app.command(epilog=UPLOAD_EPILOG)
def upload(
    api_key_id: Annotated[
        str | None,
        typer.Option("--api-key-id", "-k", envvar=API_KEY_ID_ENV, help="API key ID (required)"),
    ] = None,
    api_key_secret: Annotated[
        str | None,
        typer.Option(
            "--api-key-secret",
            "-s",
            envvar=API_KEY_SECRET_ENV,
            help="API key secret (required)",
        ),
    ] = None,
    server: Annotated[
        str | None, typer.Option("--server", "-u", help="Server URL to upload to")
    ] = None,
    file: Annotated[
        list[str] | None, typer.Option("--file", "-f", help="File to upload (repeatable)")
    ] = None,
    pattern: Annotated[
        list[str] | None,
        typer.Option(
            "--pattern",
            "-p",
            help='Glob pattern for files, e.g. "~/Videos/*.mp3" (repeatable)',
        ),
    ] = None,
    pattern_file: Annotated[
        list[Path] | None,
        typer.Option(
            "--pattern-file",
            "-P",
            help="File containing glob patterns, one per line (repeatable)",
        ),
    ] = None,
    language: Annotated[
        str | None,
        typer.Option("--language", "-l", help="Language code for transcription (see 'languages')"),
    ] = None,
    concurrent: Annotated[
        int | None,
        typer.Option(
            "--concurrent", "-c", help="Number of concurrent uploads (default: 1, max: 6)"
        ),
    ] = None,
    debug: Annotated[bool, typer.Option("--debug", "-D", help="Enable debug output")] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="List files that would be uploaded without uploading")
    ] = False,
    config: Annotated[
        Path | None, typer.Option("--config", help="YAML file with default settings")
    ] = None,
):
    """Upload media files to Trint."""
    from trint_batch.pipeline.upload import run_upload

    setup_logging(debug)

    try:
        defaults = load_upload_config(config) if config else UploadDefaults()
        options = build_options(
            api_key_id=api_key_id,
            api_key_secret=api_key_secret,
            server=server or defaults.server,
            files=file or [],
            patterns=pattern or [],
            pattern_files=pattern_file or [],
            language=language or defaults.language,
            concurrent=concurrent if concurrent is not None else defaults.concurrent,
            timeout=defaults.timeout,
            debug=debug,
            dry_run=dry_run,
        )
        run_upload(options, console=console)
    except BatchUploadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def languages():
    """List the supported transcription languages."""
    from trint_batch.languages import SUPPORTED_LANGUAGES

    table = Table(title="Supported Languages", show_header=True)
    table.add_column("Code", style="bold")
    table.add_column("Language")
    for code, name in SUPPORTED_LANGUAGES.items():
        table.add_row(code, name)

    console.print(table)


@app.command()
def extensions():
    """List the supported media file extensions."""
    from trint_batch.media.mimetype import SUPPORTED_MIMETYPES

    table = Table(title="Supported Extensions", show_header=True)
    table.add_column("Extension", style="bold")
    table.add_column("MIME type")
    for ext, mime_type in SUPPORTED_MIMETYPES.items():
        table.add_row(ext, mime_type)

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from trint_batch import __version__

    console.print(f"batch-upload version {__version__}")


if __name__ == "__main__":
    app()
