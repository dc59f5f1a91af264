"""Batch conversion of an input directory.

All input files are read concurrently and fully into memory before any output
is written. Conversion and writing then run sequentially, one file at a time.
Failures are recorded per file in an `ErrorLog` and never stop the batch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from pathlib import Path

from .config import OutlineConfig
from .emitter import emit_content, emit_section
from .exceptions import OutlineError, ReadError, UnrecognizedFilePrefixError
from .filesystem import (
    list_input_files,
    prepare_output_dir,
    read_source,
    write_error_log,
    write_output,
)
from .models import BatchResult, ErrorLog, FileKind, SourceFile
from .renderer import render_fragments

logger = logging.getLogger(__name__)


def detect_file_kind(filename: str, config: OutlineConfig | None = None) -> FileKind:
    """Choose the processing mode from a file name prefix.

    Raises:
        UnrecognizedFilePrefixError: If the name starts with neither prefix.

    Examples:
        detect_file_kind("section-01.txt")  # FileKind.SECTION
    """
    config = config or OutlineConfig()
    if filename.startswith(config.content_prefix):
        return FileKind.CONTENT
    if filename.startswith(config.section_prefix):
        return FileKind.SECTION
    raise UnrecognizedFilePrefixError(
        filename, (config.content_prefix, config.section_prefix)
    )


def convert(filename: str, lines: Iterable[str], config: OutlineConfig | None = None) -> str:
    """Convert the lines of one file into its rendered output.

    Args:
        filename: Name of the file; its prefix selects the processing mode.
        lines: Lines of the file, without line endings.
        config: Conversion configuration.

    Returns:
        str: Rendered markup for the whole file.

    Raises:
        UnrecognizedFilePrefixError: If the file name has no known prefix.
        UntitledSectionError: If strict titles are enabled and a section line
            is neither an item nor a keyword title.

    Examples:
        convert("section-1.txt", ["Mòdul 1: Intro", "> First item"])
        convert("content-1.txt", ["First", "Second"])
    """
    config = config or OutlineConfig()
    kind = detect_file_kind(filename, config)
    if kind is FileKind.CONTENT:
        fragments = emit_content(lines)
    else:
        fragments = emit_section(lines, config)
    return render_fragments(fragments, config)


async def _read_one(
    directory: Path, filename: str, max_size: int, semaphore: asyncio.Semaphore
) -> SourceFile | ReadError:
    async with semaphore:
        try:
            lines = await asyncio.to_thread(read_source, directory / filename, max_size)
        except IOError as error:
            return ReadError(filename, str(error))
    return SourceFile(name=filename, lines=lines)


async def read_sources(
    directory: Path,
    filenames: Iterable[str],
    errors: ErrorLog,
    config: OutlineConfig | None = None,
    warn: Callable[[str], None] | None = None,
) -> list[SourceFile]:
    """Read a batch of input files concurrently.

    Args:
        directory: Directory holding the files.
        filenames: Names of the files to read.
        errors: Collector receiving one `ReadError` per unreadable file.
        config: Configuration supplying the size limit and read concurrency.
        warn: Optional callback notified for every unreadable file.

    Returns:
        list[SourceFile]: Successfully read files, in the order requested.
            Unreadable files are left out entirely.
    """
    config = config or OutlineConfig()
    semaphore = asyncio.Semaphore(config.max_concurrent_reads)
    results = await asyncio.gather(
        *(
            _read_one(directory, filename, config.max_file_size, semaphore)
            for filename in filenames
        )
    )

    sources: list[SourceFile] = []
    for result in results:
        if isinstance(result, ReadError):
            logger.debug("Read failed for %s: %s", result.filename, result.cause)
            errors.record(result.filename, result)
            if warn is not None:
                warn(f'An error occurred reading "{result.filename}" and it will not be parsed!')
            continue
        sources.append(result)
    return sources


def process_sources(
    sources: Iterable[SourceFile],
    output_dir: Path,
    errors: ErrorLog,
    config: OutlineConfig | None = None,
) -> list[Path]:
    """Convert and write each source, one after another.

    Files that cannot be converted or written are recorded in `errors` and
    produce no output file.

    Returns:
        list[Path]: Paths of the output files written.
    """
    config = config or OutlineConfig()
    written: list[Path] = []

    for source in sources:
        try:
            output = convert(source.name, source.lines, config)
        except OutlineError as error:
            logger.debug("Skipping %s: %s", source.name, error)
            errors.record(source.name, error)
            continue

        target = output_dir / source.name
        try:
            write_output(target, output)
        except IOError as error:
            errors.record(source.name, error)
            continue

        logger.debug("Wrote %s", target)
        written.append(target)

    return written


async def run_batch_async(
    input_dir: Path,
    output_dir: Path,
    config: OutlineConfig | None = None,
    warn: Callable[[str], None] | None = None,
    now: Callable[[], datetime] | None = None,
) -> BatchResult:
    """Convert every outline file of `input_dir` into `output_dir`.

    Coroutine form of `run_batch` for callers that already run an event loop.
    Only the reads are concurrent; conversion and writing block the loop.

    Args:
        input_dir: Directory scanned for input files.
        output_dir: Directory receiving output files and the error log;
            created when missing.
        config: Conversion configuration.
        warn: Optional callback for non-fatal warnings (unreadable files,
            existing output directory).
        now: Clock used to timestamp the error log. Defaults to UTC now.

    Returns:
        BatchResult: Written files, recorded errors, and the error log path
            when at least one error occurred.

    Raises:
        IOError: If the input directory cannot be listed or the output
            directory cannot be prepared.

    Examples:
        result = await run_batch_async(Path("files"), Path("out"))
        print(len(result.errors))
    """
    config = config or OutlineConfig()
    errors = ErrorLog()

    filenames = list_input_files(input_dir)
    logger.debug("Found %d input files in %s", len(filenames), input_dir)
    sources = await read_sources(input_dir, filenames, errors, config, warn)

    created = prepare_output_dir(output_dir)
    if not created and warn is not None:
        warn("Output folder already exists, files WILL be overwritten!")

    written = process_sources(sources, output_dir, errors, config)

    log_path: Path | None = None
    if len(errors):
        log_path = output_dir / config.log_file
        timestamp = now() if now is not None else datetime.now(timezone.utc)
        write_error_log(log_path, errors, timestamp)

    return BatchResult(
        written=written,
        errors=errors,
        log_path=log_path,
        created_output_dir=created,
    )


def run_batch(
    input_dir: Path,
    output_dir: Path,
    config: OutlineConfig | None = None,
    warn: Callable[[str], None] | None = None,
    now: Callable[[], datetime] | None = None,
) -> BatchResult:
    """Run `run_batch_async` to completion in a new event loop.

    Must not be called while an event loop is running in the current thread
    (`asyncio.run` raises `RuntimeError`); await `run_batch_async` there.

    Examples:
        result = run_batch(Path("files"), Path("out"))
        print(len(result.errors))
    """
    return asyncio.run(run_batch_async(input_dir, output_dir, config, warn, now))
