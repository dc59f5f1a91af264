"""Data models for course-outline."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path


class LineKind(Enum):
    """Structural role of a line in a section file.

    Lines that are neither items nor nested items are classified as
    ``TITLE``, whether or not they carry a title keyword.

    Attributes:
        TITLE: Starts a new section.
        ITEM: Top-level item, one marker followed by whitespace.
        NESTED_ITEM: Second-level item, two markers followed by whitespace.
    """

    TITLE = auto()
    ITEM = auto()
    NESTED_ITEM = auto()


class FileKind(Enum):
    """Processing mode chosen from an input file name prefix."""

    CONTENT = auto()
    SECTION = auto()


class FragmentKind(Enum):
    """Vocabulary of emitted fragments.

    Section files use the ``SECTION_*``, ``TITLE``, ``ITEM_*`` and
    ``NESTED_*`` kinds; content files use the ``LIST_*`` kinds.
    """

    SECTION_OPEN = auto()
    SECTION_CLOSE = auto()
    TITLE = auto()
    ITEM_OPEN = auto()
    ITEM_CLOSE = auto()
    ITEM_TEXT = auto()
    NESTED_LIST_OPEN = auto()
    NESTED_LIST_CLOSE = auto()
    NESTED_ENTRY = auto()
    LIST_OPEN = auto()
    LIST_CLOSE = auto()
    LIST_ENTRY = auto()


@dataclass(frozen=True)
class Fragment:
    """One unit of emitted output.

    Attributes:
        kind: Structural meaning of the fragment.
        text: Content carried by title, item and entry fragments; None for
            open and close markers.
    """

    kind: FragmentKind
    text: str | None = None


@dataclass(frozen=True)
class FileError:
    """Error recorded against a single input file."""

    filename: str
    message: str

    def format(self) -> str:
        return f"[{self.filename}]: {self.message}"


@dataclass
class ErrorLog:
    """Collects per-file errors for end-of-run reporting.

    Attributes:
        errors: Recorded errors, in the order they occurred.
    """

    errors: list[FileError] = field(default_factory=list)

    def add(self, filename: str, message: str) -> FileError:
        error = FileError(filename=filename, message=message)
        self.errors.append(error)
        return error

    def record(self, filename: str, error: Exception) -> FileError:
        return self.add(filename, str(error))

    def __iter__(self) -> Iterator[FileError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


@dataclass
class SourceFile:
    """An input file read fully into memory.

    Attributes:
        name: File name relative to the input directory.
        lines: File content split into lines, without line endings.
    """

    name: str
    lines: list[str]


@dataclass
class BatchResult:
    """Outcome of converting a directory of outlines.

    Attributes:
        written: Output files produced, in processing order.
        errors: Errors recorded while reading or converting.
        log_path: Error log location, or None when no errors occurred.
        created_output_dir: Whether the output directory had to be created.
    """

    written: list[Path]
    errors: ErrorLog
    log_path: Path | None = None
    created_output_dir: bool = False
