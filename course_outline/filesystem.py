"""Filesystem helpers for course-outline."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE, ERROR_LOG_HEADER
from .models import FileError

MAX_FILE_SIZE_ENV_VAR = "COURSE_OUTLINE_MAX_FILE_SIZE"
OUTPUT_FILE_MODE = 0o644


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed input file size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["COURSE_OUTLINE_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def list_input_files(directory: Path) -> list[str]:
    """List every entry of an input directory.

    Nothing is filtered out: hidden files, subdirectories and symlinks are
    listed too, so reading or dispatching them records an error later.

    Args:
        directory: Directory to scan.

    Returns:
        list[str]: File names sorted alphabetically.

    Raises:
        IOError: If the directory is missing or cannot be listed.

    Examples:
        list_input_files(Path("files"))  # ["content-1.txt", "section-1.txt"]
    """
    try:
        entries = list(os.scandir(directory))
    except OSError as error:
        error_message = f"Error accessing input directory {directory}: {error}"
        raise IOError(error_message) from error

    return sorted(entry.name for entry in entries)


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Raises:
        IOError: If the path is inaccessible, a symlink, or not a regular file.
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    if stat.S_ISLNK(stat_result.st_mode):
        error_message = f"Symlinks are not supported: {filepath}."
        raise IOError(error_message)

    if not stat.S_ISREG(stat_result.st_mode):
        error_message = f"{filepath} is not a regular file."
        raise IOError(error_message)

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        IOError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        error_message = f"{filepath} exceeds the maximum allowed size of {max_size} bytes."
        raise IOError(error_message)


def read_source(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> list[str]:
    """Read an outline file fully and split it into lines.

    Lines are split on ``\\n`` only, with one trailing ``\\r`` removed from each.
    Other characters `str.splitlines` treats as breaks (form feeds, U+2028)
    stay inside the line. A trailing newline does not produce an extra empty
    line.

    Args:
        filepath: Path to the file.
        max_size: Maximum allowed size in bytes.

    Returns:
        list[str]: Lines without line endings.

    Raises:
        IOError: If the file is missing, inaccessible, too large, not a regular
            file, or not valid UTF-8.

    Examples:
        lines = read_source(Path("files/section-1.txt"))
    """
    stat_result = collect_file_stat(filepath)
    enforce_file_size(stat_result, max_size, filepath)

    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as file:
            content = file.read()
    except UnicodeDecodeError as error:
        error_message = f"Invalid UTF-8 sequence in {filepath}: {error}"
        raise IOError(error_message) from error
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def prepare_output_dir(directory: Path) -> bool:
    """Ensure the output directory exists.

    Args:
        directory: Output directory.

    Returns:
        bool: True when the directory was created, False when it already
            existed and its files will be overwritten.

    Raises:
        IOError: If the path exists but is not a directory, or cannot be
            created.
    """
    if directory.is_dir():
        return False
    if directory.exists():
        raise IOError(f"{directory} exists and is not a directory.")

    try:
        directory.mkdir(parents=True)
    except OSError as error:
        error_message = f"Error creating output directory {directory}: {error}"
        raise IOError(error_message) from error
    return True


def write_output(filepath: Path, text: str):
    """Replace the content of an output file.

    The text is written to a temporary file in the same directory and moved
    into place, so a reader never sees a partially written file.

    Args:
        filepath: Destination path; previous content is discarded.
        text: Full output content.

    Raises:
        IOError: If the file cannot be written.

    Examples:
        write_output(Path("out/section-1.txt"), '<div class="section">...</div>')
    """
    try:
        current_stat = os.stat(filepath, follow_symlinks=False)
    except FileNotFoundError:
        current_stat = None
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error}"
        raise IOError(error_message) from error

    # Symlinked targets are replaced by a regular file with the default mode
    if current_stat is not None and stat.S_ISREG(current_stat.st_mode):
        permissions = stat.S_IMODE(current_stat.st_mode)
    else:
        permissions = OUTPUT_FILE_MODE

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
    except OSError as error:
        error_message = f"Error writing {filepath}: {error}"
        raise IOError(error_message) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass


def format_error_log(errors: Iterable[FileError], now: datetime) -> str:
    """Render the error log: a timestamped header and one line per error.

    Examples:
        format_error_log([FileError("notes.txt", "bad prefix")], datetime.now(timezone.utc))
    """
    lines = [f"{ERROR_LOG_HEADER} - {now.isoformat()}\n"]
    lines.extend(f"{error.format()}\n" for error in errors)
    return "".join(lines)


def write_error_log(filepath: Path, errors: Iterable[FileError], now: datetime):
    """Write the end-of-run error log, replacing any previous log.

    Raises:
        IOError: If the log cannot be written.
    """
    write_output(filepath, format_error_log(errors, now))
