"""Package-specific exception types."""

from __future__ import annotations


class OutlineError(ValueError):
    """Base class for outline conversion errors.

    Represents errors encountered while reading or converting a single
    outline file. They are recorded per file and never abort a batch.
    """


class ReadError(OutlineError):
    """Raised when an input file cannot be read.

    Args:
        filename: Name of the file that failed.
        cause: Description of the underlying failure.
    """

    def __init__(self, filename: str, cause: str):
        self.filename = filename
        self.cause = cause
        super().__init__(f"{filename} could not be read: {cause}")


class UnrecognizedFilePrefixError(OutlineError):
    """Raised when a file name matches neither the content nor section prefix.

    Args:
        filename: Name of the rejected file.
        prefixes: Prefixes that would have been accepted.
    """

    def __init__(self, filename: str, prefixes: tuple[str, ...] = ("content", "section")):
        self.filename = filename
        self.prefixes = prefixes
        expected = " or ".join(f'"{prefix}"' for prefix in prefixes)
        super().__init__(f"{filename} does not have a {expected} prefix")


class UntitledSectionError(OutlineError):
    """Raised in strict mode when a section line has no title keyword.

    Args:
        line_number: One-based index of the offending line.
        line: The offending line.
    """

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"Line {self.line_number} is neither an item nor a titled section: "
            f"{self.line!r}"
        )
