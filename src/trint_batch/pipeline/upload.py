"""Pipeline for uploading a batch of local media files to Trint."""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed

from rich.console import Console
from rich.markup import escape

from trint_batch.config import API_KEY_ID_ENV, API_KEY_SECRET_ENV, UploadOptions
from trint_batch.errors import ConfigurationError
from trint_batch.languages import describe_language, is_known_language
from trint_batch.media.mimetype import filter_supported_files, get_supported_extensions
from trint_batch.models.upload import UploadOutcome
from trint_batch.pipeline._shared import BatchSummary, ResolvedFile, printable
from trint_batch.selection.patterns import expand_patterns, parse_patterns_file
from trint_batch.trint.client import reset_sessions
from trint_batch.trint.upload import file_upload

logger = logging.getLogger(__name__)

Uploader = Callable[..., UploadOutcome]


def validate_credentials(options: UploadOptions):
    """Raise ConfigurationError unless both API key fields are set."""
    if not options.api_key_id:
        raise ConfigurationError(
            f"API Key ID is required. Provide via --api-key-id or {API_KEY_ID_ENV} "
            "environment variable"
        )
    if not options.api_key_secret:
        raise ConfigurationError(
            f"API Key Secret is required. Provide via --api-key-secret or "
            f"{API_KEY_SECRET_ENV} environment variable"
        )


def print_configuration(options: UploadOptions, console: Console):
    """Show the run configuration, with the secret masked."""
    console.print("[bold]Configuration:[/bold]")
    console.print(f"  API Key ID: {escape(options.api_key_id or '')}")
    console.print(f"  API Key Secret: ***{escape((options.api_key_secret or '')[-4:])}")
    if options.server:
        console.print(f"  Server: {escape(options.server)}")
    if options.language:
        console.print(f"  Language: {escape(describe_language(options.language))}")
    console.print(f"  Concurrent uploads: {options.concurrent}")
    console.print(f"  Debug mode: {options.debug}")
    console.print(f"  Dry run mode: {options.dry_run}")
    if options.files:
        console.print(f"  Files: {escape(', '.join(options.files))}")
    if options.patterns:
        console.print(f"  Patterns: {escape(', '.join(options.patterns))}")
    if options.pattern_files:
        pattern_files = ", ".join(str(p) for p in options.pattern_files)
        console.print(f"  Pattern files: {escape(pattern_files)}")


def collect_files(options: UploadOptions) -> list[str]:
    """
    Build the candidate file list for a run.

    Order: explicit files, then files matched by the patterns, then files
    matched by the patterns read from each pattern file. Duplicates are kept.

    Raises:
        ResolutionError: If a pattern file cannot be read or a pattern is invalid
    """
    all_files = list(options.files)

    if options.patterns:
        all_files.extend(expand_patterns(options.patterns, debug=options.debug))

    for pattern_file in options.pattern_files:
        patterns = parse_patterns_file(pattern_file)
        if options.debug:
            logger.debug("Loaded %d patterns from %s", len(patterns), pattern_file)
        all_files.extend(expand_patterns(patterns, debug=options.debug))

    if options.debug:
        logger.debug("Total files collected before filtering: %d", len(all_files))

    return all_files


def upload_files(
    files: list[str],
    options: UploadOptions,
    console: Console,
    uploader: Uploader | None = None,
    summary: BatchSummary | None = None,
) -> BatchSummary:
    """
    Upload files with at most ``options.concurrent`` uploads in flight.

    Files are dispatched in list order; completion order is arbitrary. Every
    file is attempted exactly once, and an error on one file is counted as a
    failure without affecting the others.

    Args:
        files: Supported files to upload
        options: Run options (credentials, server, language, concurrency)
        console: Rich console for per-file output
        uploader: Upload function, called once per file
        summary: Summary to update (a new one is created if omitted)

    Returns:
        BatchSummary with success and failure counts
    """
    if uploader is None:
        uploader = file_upload
    if summary is None:
        summary = BatchSummary(total_candidates=len(files), total_supported=len(files))

    # Guards the counters, the failure list and console output
    lock = threading.Lock()

    def upload_one(item: ResolvedFile):
        tag = f"\\[{item.upload_id}]"
        path = escape(item.display_path)

        try:
            with lock:
                console.print(f"  {tag} Uploading: {path}")
            result = uploader(
                file_path=item.path,
                api_key_id=options.api_key_id,
                api_key_secret=options.api_key_secret,
                upload_server=options.server,
                language=options.language,
                upload_id=item.upload_id,
                debug=options.debug,
                timeout=options.timeout,
            )
        except Exception as e:
            with lock:
                summary.failed += 1
                summary.failures.append({"id": item.upload_id, "path": item.path, "error": str(e)})
                error = escape(printable(str(e)))
                console.print(f'  {tag} [red]✗ Error:[/red] "{path}" {error}')
            return

        with lock:
            if result.success:
                summary.succeeded += 1
                trint_ref = f" => \\[TrintId={escape(result.trint_id)}]" if result.trint_id else ""
                console.print(f'  {tag} [green]✓ Success:[/green] "{path}"{trint_ref}')
            else:
                summary.failed += 1
                summary.failures.append(
                    {"id": item.upload_id, "path": item.path, "error": result.message}
                )
                console.print(
                    f'  {tag} [red]✗ Failed:[/red] "{path}", {escape(result.message or "")}'
                )

    items = [ResolvedFile.from_path(f) for f in files]
    try:
        with ThreadPoolExecutor(
            max_workers=options.concurrent, thread_name_prefix="upload"
        ) as executor:
            futures = [executor.submit(upload_one, item) for item in items]
            for future in as_completed(futures):
                future.result()
    finally:
        # Worker threads are gone; release their sessions and connection pools
        reset_sessions()

    return summary


def run_upload(
    options: UploadOptions,
    console: Console | None = None,
    uploader: Uploader | None = None,
) -> BatchSummary:
    """
    Full pipeline: validate -> collect -> filter -> upload (or list in dry run).

    Flow:
    1. Check that both credentials are present
    2. Collect explicit files and files matched by patterns and pattern files
    3. Keep only supported media files
    4. In dry run, list the files with their IDs and stop
    5. Upload with bounded concurrency and report the counts

    Args:
        options: Run options
        console: Rich console for output
        uploader: Upload function (defaults to the Trint HTTP upload)

    Returns:
        BatchSummary for the run. Per-file failures are counted, never raised.

    Raises:
        ConfigurationError: If credentials are missing
        ResolutionError: If a pattern file or pattern cannot be resolved
    """
    if console is None:
        console = Console()

    console.print("[bold]Trint Batch Upload Tool[/bold]")
    console.print("=========================\n")

    validate_credentials(options)
    print_configuration(options, console)

    if options.language and not is_known_language(options.language):
        logger.warning("Language code %r is not in the list of known languages", options.language)

    if options.debug:
        logger.debug("Supported file extensions: %s", ", ".join(get_supported_extensions()))

    all_files = collect_files(options)
    files_to_upload = filter_supported_files(all_files, debug=options.debug)

    summary = BatchSummary(
        total_candidates=len(all_files),
        total_supported=len(files_to_upload),
        dry_run=options.dry_run,
    )

    if all_files and not files_to_upload:
        console.print(
            "\n[yellow]No supported media files found.[/yellow] Supported extensions: "
            + ", ".join(get_supported_extensions())
        )
        return summary

    if not files_to_upload:
        console.print("\n[yellow]No files to upload.[/yellow]")
        return summary

    if options.dry_run:
        console.print(f"\n[yellow]Dry run: Would upload {len(files_to_upload)} file(s):[/yellow]")
        for i, file in enumerate(files_to_upload):
            item = ResolvedFile.from_path(file)
            summary.planned.append(item)
            console.print(f"  {i + 1}. \\[{item.upload_id}] {escape(item.display_path)}")
        console.print("\nNo files were uploaded (dry run mode).")
        return summary

    console.print(
        f"\n[bold]Uploading {len(files_to_upload)} file(s) "
        f"with concurrency {options.concurrent}...[/bold]"
    )
    upload_files(files_to_upload, options, console, uploader=uploader, summary=summary)

    console.print(
        f"\n[green]Upload complete:[/green] {summary.succeeded} succeeded, {summary.failed} failed"
    )
    return summary
